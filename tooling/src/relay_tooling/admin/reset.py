"""Reset admin credentials: back up and delete data/init.json, restart the relay container.

The service regenerates init.json on start from ADMIN_USERNAME / ADMIN_PASSWORD in .env.
If the restart fails after deletion, the backup is restored so the service keeps its old login.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import yaml

from relay_tooling import console
from relay_tooling.compose import ComposeVariant, compose_command, detect_compose

log = logging.getLogger(__name__)

PROJECT_MARKER = "docker-compose.yml"
INIT_FILE = Path("data") / "init.json"
SERVICE_NAME = "claude-relay"
RESTART_WAIT_SECONDS = 3
BACKUP_STAMP_FORMAT = "%Y%m%d_%H%M%S"

_CREDENTIAL_LINE = re.compile(r"(adminUsername|adminPassword)")


def backup_path_for(path: Path, now: datetime | None = None) -> Path:
    """init.json -> init.json.backup.YYYYmmdd_HHMMSS (same directory)."""
    stamp = (now or datetime.now()).strftime(BACKUP_STAMP_FORMAT)
    return path.with_name(f"{path.name}.backup.{stamp}")


def credential_lines(text: str) -> list[str]:
    """Lines mentioning adminUsername/adminPassword, like `grep -E`."""
    return [line for line in text.splitlines() if _CREDENTIAL_LINE.search(line)]


def _show_credentials(path: Path) -> bool:
    """Print credential lines; False (after an error message) when the file is unreadable."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        console.error(f"Could not read {path}: {e}")
        return False
    for line in credential_lines(text):
        console.detail(line)
    return True


def _check_compose_service(marker: Path) -> None:
    """Warn when the compose file parses but does not declare the relay service."""
    try:
        data = yaml.safe_load(marker.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        log.debug("Could not parse %s: %s", marker, e)
        return
    services = data.get("services") if isinstance(data, dict) else None
    if isinstance(services, dict) and SERVICE_NAME not in services:
        console.warning(f"{marker.name} does not define a '{SERVICE_NAME}' service")


def _print_manual_restart() -> None:
    console.info("Restart the container manually:")
    console.detail(f"docker-compose restart {SERVICE_NAME}")
    console.detail("or")
    console.detail(f"docker compose restart {SERVICE_NAME}")


def _restore(backup: Path, init_file: Path) -> None:
    if init_file.exists():
        log.debug("%s was re-created; not restoring backup", init_file)
        return
    try:
        shutil.copy2(backup, init_file)
    except OSError as e:
        console.error(f"Could not restore {init_file} from {backup}: {e}")
        return
    console.warning(f"Restored previous credentials from {backup}")


def run(
    project_root: Path,
    *,
    assume_yes: bool = False,
    input_fn: Callable[[str], str] = input,
    sleep_fn: Callable[[float], None] = time.sleep,
    now: datetime | None = None,
) -> int:
    """Back up and remove init.json, restart the relay service, show new credentials. Returns 0 or 1."""
    marker = project_root / PROJECT_MARKER
    if not marker.is_file():
        console.error(f"Run this from the project root ({PROJECT_MARKER} not found in {project_root})")
        return 1
    _check_compose_service(marker)

    init_file = project_root / INIT_FILE
    if not init_file.is_file():
        console.warning(f"{INIT_FILE} not found")
        console.info("It is created automatically when the container first starts")
        return 0

    console.info("Current admin credentials:")
    if not _show_credentials(init_file):
        return 1
    print()
    console.warning(
        "After deletion the container re-initialises from ADMIN_USERNAME and "
        "ADMIN_PASSWORD in .env on restart"
    )
    if not assume_yes and not console.confirm(
        f"Delete {INIT_FILE} and restart the container?", input_fn
    ):
        console.info("Cancelled")
        return 0

    backup = backup_path_for(init_file, now)
    if backup.exists():
        console.error(f"Backup {backup} already exists; not overwriting it. Try again in a second")
        return 1
    try:
        shutil.copy2(init_file, backup)
        console.info(f"Backed up to: {backup}")
        init_file.unlink()
    except OSError as e:
        console.error(f"Could not back up or delete {init_file}: {e}")
        return 1
    console.success(f"Deleted {INIT_FILE}")

    variant = detect_compose()
    log.debug("compose variant: %s", variant)
    if variant is ComposeVariant.ABSENT:
        console.warning("docker compose / docker-compose not found")
        _print_manual_restart()
        return 0

    console.info("Restarting container to apply the new admin credentials...")
    cmd = compose_command(variant, "restart", SERVICE_NAME)
    try:
        r = subprocess.run(cmd, cwd=project_root)
        rc = r.returncode
    except OSError as e:
        log.debug("%s failed to start: %s", cmd, e)
        rc = 1
    if rc != 0:
        console.error(f"Container restart failed: {' '.join(cmd)} (backup kept at {backup})")
        _restore(backup, init_file)
        return 1

    console.success("Container restarted")
    console.info("Waiting for the service to start...")
    sleep_fn(RESTART_WAIT_SECONDS)

    if init_file.is_file():
        console.success("New admin credentials:")
        if not _show_credentials(init_file):
            return 1
    else:
        console.warning("Check the container logs for the new admin credentials:")
        logs = compose_command(variant, "logs", SERVICE_NAME)
        console.detail(f"{' '.join(logs)} | grep -i admin")
    return 0
