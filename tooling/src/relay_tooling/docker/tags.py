"""Tag list and `docker buildx build` argv assembly."""

from __future__ import annotations

from relay_tooling.docker.config import BuildConfig


def image_tags(config: BuildConfig) -> list[str]:
    """Primary {ns}/{image}:{version}, then one ref per extra tag, in order."""
    base = config.full_image_name
    return [f"{base}:{config.version}", *(f"{base}:{t}" for t in config.extra_tags)]


def effective_platforms(config: BuildConfig) -> tuple[list[str], bool]:
    """Platforms to build. --load supports one platform, so narrow to the first when not pushing.

    Returns (platforms, narrowed).
    """
    platforms = list(config.platforms)
    if not config.push and len(platforms) > 1:
        return platforms[:1], True
    return platforms, False


def build_command(config: BuildConfig, tags: list[str], platforms: list[str]) -> list[str]:
    cmd = ["docker", "buildx", "build", "--platform", ",".join(platforms)]
    for t in tags:
        cmd += ["--tag", t]
    if not config.use_cache:
        cmd.append("--no-cache")
    cmd += ["--file", config.dockerfile]
    cmd.append("--push" if config.push else "--load")
    cmd.append(config.context)
    return cmd
