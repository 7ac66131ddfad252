"""Compose CLI detection: `docker compose` plugin vs standalone `docker-compose`."""

from relay_tooling.compose.detect import ComposeVariant, compose_command, detect_compose

__all__ = [
    "ComposeVariant",
    "compose_command",
    "detect_compose",
]
