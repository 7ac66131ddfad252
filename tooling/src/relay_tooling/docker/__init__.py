"""Docker helpers: build config resolution, tag assembly, buildx builder, build-and-push."""

from relay_tooling.docker.build_push import run as run_build_push
from relay_tooling.docker.config import BuildConfig, ConfigError, resolve_build_config
from relay_tooling.docker.tags import build_command, effective_platforms, image_tags

__all__ = [
    "BuildConfig",
    "ConfigError",
    "build_command",
    "effective_platforms",
    "image_tags",
    "resolve_build_config",
    "run_build_push",
]
