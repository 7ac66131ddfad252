"""Docker buildx checks and builder instance management."""

from __future__ import annotations

import logging
import shutil
import subprocess

from relay_tooling import console

log = logging.getLogger(__name__)

BUILDER_NAME = "claude-relay-builder"


def _quiet(cmd: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(cmd, capture_output=True, text=True)


def check_buildx() -> bool:
    """True when docker is on PATH and `docker buildx version` succeeds."""
    if not shutil.which("docker"):
        console.error("Docker is not installed; install Docker first")
        return False
    try:
        r = _quiet(["docker", "buildx", "version"])
    except OSError as e:
        log.debug("docker buildx version failed to start: %s", e)
        r = None
    if r is None or r.returncode != 0:
        console.error("Docker Buildx is not installed or not available")
        console.info("Docker >= 19.03 with the buildx plugin is required")
        return False
    log.debug("buildx: %s", (r.stdout or "").strip())
    return True


def docker_logged_in() -> bool:
    """Best effort: `docker info` mentions a Username when logged in to a registry."""
    try:
        r = _quiet(["docker", "info"])
    except OSError as e:
        log.debug("docker info failed to start: %s", e)
        return False
    return r.returncode == 0 and "Username" in (r.stdout or "")


def _builder_exists(name: str) -> bool:
    r = _quiet(["docker", "buildx", "ls"])
    if r.returncode != 0:
        log.debug("docker buildx ls failed: %s", (r.stderr or "").strip())
        return False
    return any(line.split()[0].rstrip("*") == name for line in r.stdout.splitlines() if line.split())


def ensure_builder(name: str = BUILDER_NAME) -> None:
    """Create and select the builder if absent, else switch to it. Failures only warn."""
    try:
        if not _builder_exists(name):
            console.info(f"Creating buildx builder: {name}")
            r = _quiet(["docker", "buildx", "create", "--name", name, "--use", "--bootstrap"])
            if r.returncode != 0:
                console.warning(f"Could not create builder {name}: {(r.stderr or '').strip()}")
                return
            console.success("Builder created")
            return
        console.info(f"Using existing builder: {name}")
        r = _quiet(["docker", "buildx", "use", name])
        if r.returncode != 0:
            console.warning(f"Could not switch to builder {name}: {(r.stderr or '').strip()}")
            return
        r = _quiet(["docker", "buildx", "inspect", "--bootstrap"])
        if r.returncode != 0:
            log.debug("buildx inspect --bootstrap failed: %s", (r.stderr or "").strip())
    except OSError as e:
        console.warning(f"Builder setup skipped: {e}")
