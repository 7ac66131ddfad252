"""Build (and optionally push) multi-architecture images with docker buildx."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path

from relay_tooling import console
from relay_tooling.docker.builder import (
    BUILDER_NAME,
    check_buildx,
    docker_logged_in,
    ensure_builder,
)
from relay_tooling.docker.config import BuildConfig
from relay_tooling.docker.tags import build_command, effective_platforms, image_tags

log = logging.getLogger(__name__)


def _print_summary(config: BuildConfig) -> None:
    console.info("Build configuration:")
    print(f"  Image:     {config.full_image_name}")
    print(f"  Version:   {config.version}")
    print(f"  Platforms: {config.platform_arg}")
    if config.extra_tags:
        print(f"  Extra tags: {' '.join(config.extra_tags)}")
    print(f"  Push:      {'yes' if config.push else 'no'}")
    print(f"  Cache:     {'on' if config.use_cache else 'off'}")
    print()


def run(
    config: BuildConfig,
    project_root: Path,
    *,
    input_fn: Callable[[str], str] = input,
    builder_name: str = BUILDER_NAME,
) -> int:
    """Check buildx, ensure builder, run one buildx build, report tags. Returns 0 or 1."""
    console.info("Checking Docker Buildx...")
    if not check_buildx():
        return 1

    if config.push and not docker_logged_in():
        console.warning("No Docker Hub login detected")
        console.info("Run: docker login")
        if not console.confirm("Continue anyway?", input_fn):
            return 1

    ensure_builder(builder_name)
    _print_summary(config)

    tags = image_tags(config)
    platforms, narrowed = effective_platforms(config)
    if narrowed:
        console.warning(f"--load supports a single platform; using the first: {platforms[0]}")
    cmd = build_command(config, tags, platforms)

    console.info("Building image...")
    console.info(f"Command: {shlex.join(cmd)}")
    print()
    try:
        r = subprocess.run(cmd, cwd=str(project_root))
        rc = r.returncode
    except OSError as e:
        log.debug("buildx build failed to start: %s", e)
        rc = 1
    if rc != 0:
        console.error("Image build failed")
        return 1

    console.success("Image build complete!")
    print()
    if config.push:
        console.success("Pushed to registry:")
    else:
        console.success("Built into local image store:")
    for t in tags:
        print(f"  - {t}")
    if config.push:
        print()
        console.info("Pull command:")
        print(f"  docker pull {tags[0]}")
    return 0
