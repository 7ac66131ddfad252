"""Build configuration: defaults < relay-build.yaml < environment < CLI flags."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "relay-build.yaml"

DEFAULT_USERNAME = "klause"
DEFAULT_IMAGE_NAME = "claude-relay-service"
DEFAULT_VERSION = "latest"
DEFAULT_PLATFORMS = "linux/amd64,linux/arm64"
DEFAULT_DOCKERFILE = "Dockerfile"
DEFAULT_CONTEXT = "."

# config-file key -> environment variable
ENV_VARS: dict[str, str] = {
    "username": "DOCKER_USERNAME",
    "image": "IMAGE_NAME",
    "version": "VERSION",
    "platforms": "PLATFORMS",
}

STRING_KEYS = frozenset({"username", "image", "version", "dockerfile", "context"})
LIST_KEYS = frozenset({"platforms", "tags"})
FILE_KEYS = STRING_KEYS | LIST_KEYS


class ConfigError(ValueError):
    """Invalid build configuration (bad config file, empty platform list, ...)."""


@dataclass(frozen=True)
class BuildConfig:
    namespace: str
    image_name: str
    version: str
    platforms: tuple[str, ...]
    extra_tags: tuple[str, ...] = ()
    push: bool = True
    use_cache: bool = True
    dockerfile: str = DEFAULT_DOCKERFILE
    context: str = DEFAULT_CONTEXT

    @property
    def full_image_name(self) -> str:
        return f"{self.namespace}/{self.image_name}"

    @property
    def platform_arg(self) -> str:
        return ",".join(self.platforms)


def parse_platforms(value: str | Iterable[str]) -> tuple[str, ...]:
    """Split a comma-separated platform list; strip, drop empties, de-duplicate in order."""
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        parts = list(value)
    else:
        msg = f"Platforms must be a comma-separated string or a list of strings, got {value!r}"
        raise ConfigError(msg)
    out: list[str] = []
    for p in parts:
        p = p.strip()
        if p and p not in out:
            out.append(p)
    if not out:
        msg = f"No platforms in {value!r}"
        raise ConfigError(msg)
    return tuple(out)


def _check_file_value(path: Path, key: str, value: Any) -> None:
    """YAML turns 1.10 into the float 1.1; insist on strings so tags are not rewritten."""
    if key in STRING_KEYS:
        if not isinstance(value, str):
            msg = f'{path}: {key} must be a string, got {value!r}; quote it: {key}: "{value}"'
            raise ConfigError(msg)
        return
    if isinstance(value, str):
        return
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"{path}: {key} must be a string or a list of quoted strings, got {value!r}"
        raise ConfigError(msg)


def load_config_file(project_root: Path) -> dict[str, Any]:
    """Load relay-build.yaml from project_root. Missing file -> {}. Raises ConfigError if not a mapping."""
    path = project_root / CONFIG_FILE_NAME
    if not path.is_file():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        msg = f"Could not read {path}: {e}"
        raise ConfigError(msg) from e
    except yaml.YAMLError as e:
        msg = f"Could not parse {path}: {e}"
        raise ConfigError(msg) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    for key in sorted(set(data) - FILE_KEYS):
        log.warning("Ignoring unknown key %r in %s", key, path)
    values = {k: v for k, v in data.items() if k in FILE_KEYS and v is not None}
    for key, value in values.items():
        _check_file_value(path, key, value)
    return values


def resolve_build_config(
    env: Mapping[str, str],
    file_values: Mapping[str, Any] | None = None,
    *,
    username: str | None = None,
    image: str | None = None,
    version: str | None = None,
    platforms: str | None = None,
    tags: Iterable[str] | None = None,
    push: bool = True,
    use_cache: bool = True,
    dockerfile: str | None = None,
    context: str | None = None,
) -> BuildConfig:
    """Merge defaults, config file values, environment and CLI flags (later wins). Pure."""
    values: dict[str, Any] = {
        "username": DEFAULT_USERNAME,
        "image": DEFAULT_IMAGE_NAME,
        "version": DEFAULT_VERSION,
        "platforms": DEFAULT_PLATFORMS,
        "tags": [],
        "dockerfile": DEFAULT_DOCKERFILE,
        "context": DEFAULT_CONTEXT,
    }
    values.update(file_values or {})
    for key, var in ENV_VARS.items():
        if env.get(var):
            values[key] = env[var]
    flags = {
        "username": username,
        "image": image,
        "version": version,
        "platforms": platforms,
        "dockerfile": dockerfile,
        "context": context,
    }
    values.update({k: v for k, v in flags.items() if v is not None})

    file_tags = values["tags"]
    if isinstance(file_tags, str):
        file_tags = [file_tags]
    if not isinstance(file_tags, (list, tuple)) or not all(isinstance(t, str) for t in file_tags):
        msg = f"Tags must be a list of strings, got {file_tags!r}"
        raise ConfigError(msg)
    extra_tags = list(file_tags)
    # CLI tags replace file tags, like any other flag.
    if tags:
        extra_tags = list(tags)

    return BuildConfig(
        namespace=str(values["username"]),
        image_name=str(values["image"]),
        version=str(values["version"]),
        platforms=parse_platforms(values["platforms"]),
        extra_tags=tuple(extra_tags),
        push=push,
        use_cache=use_cache,
        dockerfile=str(values["dockerfile"]),
        context=str(values["context"]),
    )
