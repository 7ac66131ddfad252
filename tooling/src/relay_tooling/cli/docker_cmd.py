"""`relay docker` subcommands: build-push."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from relay_tooling import console
from relay_tooling.cli.parsing import UsageExitParser
from relay_tooling.docker.build_push import run as run_build_push
from relay_tooling.docker.config import (
    DEFAULT_IMAGE_NAME,
    DEFAULT_PLATFORMS,
    DEFAULT_USERNAME,
    DEFAULT_VERSION,
    ConfigError,
    load_config_file,
    resolve_build_config,
)

EPILOG = """\
environment variables:
  DOCKER_USERNAME            registry username / namespace
  IMAGE_NAME                 image name
  VERSION                    version tag
  PLATFORMS                  comma-separated platform list

examples:
  relay docker build-push                         build and push with defaults
  relay docker build-push -u myuser -v v1.0.0     set namespace and version
  relay docker build-push --no-push               build into the local image store
  relay docker build-push -v v1.0.0 -t latest -t stable
  relay docker build-push -p linux/amd64          amd64 only
"""


def build_parser() -> argparse.ArgumentParser:
    ap = UsageExitParser(
        prog="relay docker build-push",
        description="Build multi-architecture images with docker buildx and push them.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("-u", "--username", help=f"Registry username (default: {DEFAULT_USERNAME})")
    ap.add_argument("-i", "--image", help=f"Image name (default: {DEFAULT_IMAGE_NAME})")
    ap.add_argument("-v", "--version", help=f"Version tag (default: {DEFAULT_VERSION})")
    ap.add_argument(
        "-p", "--platforms", help=f"Comma-separated platform list (default: {DEFAULT_PLATFORMS})"
    )
    ap.add_argument(
        "-t",
        "--tag",
        dest="tags",
        action="append",
        default=[],
        metavar="TAG",
        help="Extra tag (repeatable)",
    )
    ap.add_argument("--no-push", action="store_true", help="Build only, do not push")
    ap.add_argument("--no-cache", action="store_true", help="Build without cache")
    ap.add_argument("-f", "--file", dest="dockerfile", help="Dockerfile (default: Dockerfile)")
    ap.add_argument("--context", help="Build context (default: .)")
    ap.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Project root (default: cwd)",
    )
    return ap


def run_build_push_argv(argv: list[str]) -> int:
    args = build_parser().parse_args(argv)
    project_root = (args.project_root or Path.cwd()).resolve()
    try:
        config = resolve_build_config(
            os.environ,
            load_config_file(project_root),
            username=args.username,
            image=args.image,
            version=args.version,
            platforms=args.platforms,
            tags=args.tags,
            push=not args.no_push,
            use_cache=not args.no_cache,
            dockerfile=args.dockerfile,
            context=args.context,
        )
    except ConfigError as e:
        console.error(str(e))
        return 1
    return run_build_push(config, project_root)


def run_docker_argv(argv: list[str] | None = None) -> None:
    """Parse docker subcommand from argv and run. argv defaults to sys.argv[2:] when called from main."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    if not argv:
        print("relay docker: missing subcommand (build-push)", file=sys.stderr)
        sys.exit(1)
    cmd = argv[0]
    rest = argv[1:]

    if cmd == "build-push":
        sys.exit(run_build_push_argv(rest))

    print(f"Unknown docker subcommand: {cmd}", file=sys.stderr)
    sys.exit(1)
