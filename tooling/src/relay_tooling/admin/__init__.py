"""Admin credential maintenance for a running relay deployment."""

from relay_tooling.admin.reset import run as run_reset

__all__ = ["run_reset"]
