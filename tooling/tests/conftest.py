"""Pytest fixtures for relay tooling tests."""

from pathlib import Path

import pytest

from relay_tooling.docker.config import ENV_VARS

COMPOSE_YML = """\
services:
  claude-relay:
    image: klause/claude-relay-service:latest
    volumes:
      - ./data:/app/data
"""

INIT_JSON = """\
{
  "initializedAt": "2025-01-01T00:00:00.000Z",
  "adminUsername": "cr_admin_ab12",
  "adminPassword": "s3cret-old",
  "version": "1.0.0"
}
"""


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project root with docker-compose.yml and data/init.json."""
    (tmp_path / "docker-compose.yml").write_text(COMPOSE_YML)
    data = tmp_path / "data"
    data.mkdir()
    (data / "init.json").write_text(INIT_JSON)
    return tmp_path


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset build-related environment variables."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
