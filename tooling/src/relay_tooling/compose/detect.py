"""Detect which compose CLI form is available on this host."""

from __future__ import annotations

import logging
import shutil
import subprocess
from enum import Enum

log = logging.getLogger(__name__)


class ComposeVariant(Enum):
    MODERN = "docker compose"
    LEGACY = "docker-compose"
    ABSENT = "absent"


def _plugin_available() -> bool:
    if not shutil.which("docker"):
        return False
    try:
        r = subprocess.run(
            ["docker", "compose", "version"],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        log.debug("docker compose version failed to start: %s", e)
        return False
    return r.returncode == 0


def detect_compose() -> ComposeVariant:
    """Prefer the `docker compose` plugin; fall back to `docker-compose`; else ABSENT."""
    if _plugin_available():
        return ComposeVariant.MODERN
    if shutil.which("docker-compose"):
        return ComposeVariant.LEGACY
    return ComposeVariant.ABSENT


def compose_command(variant: ComposeVariant, *args: str) -> list[str]:
    """Argv for a compose subcommand under the given variant. Raises ValueError for ABSENT."""
    if variant is ComposeVariant.MODERN:
        return ["docker", "compose", *args]
    if variant is ComposeVariant.LEGACY:
        return ["docker-compose", *args]
    msg = "No compose CLI available"
    raise ValueError(msg)
