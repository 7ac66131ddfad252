"""Operator-facing console messages (emoji prefix, ANSI colour on a TTY)."""

from __future__ import annotations

import os
import sys
from typing import TextIO

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
NC = "\033[0m"


def _use_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _emit(prefix: str, color: str, message: str, stream: TextIO) -> None:
    line = f"{prefix} {message}"
    if _use_color(stream):
        line = f"{color}{line}{NC}"
    print(line, file=stream)


def info(message: str) -> None:
    _emit("ℹ️ ", BLUE, message, sys.stdout)


def success(message: str) -> None:
    _emit("✅", GREEN, message, sys.stdout)


def warning(message: str) -> None:
    _emit("⚠️ ", YELLOW, message, sys.stderr)


def error(message: str) -> None:
    _emit("❌", RED, message, sys.stderr)


def detail(message: str) -> None:
    """Indented plain line under a heading (no prefix, no colour)."""
    print(f"   {message}")


def confirm(prompt: str, input_fn=input) -> bool:
    """Ask a (y/N) question. Only 'y' or 'Y' confirms; EOF counts as no."""
    try:
        reply = input_fn(f"{prompt} (y/N): ")
    except EOFError:
        print()
        return False
    return reply.strip() in ("y", "Y")
