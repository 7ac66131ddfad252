"""Main CLI entry point for relay tooling."""

import logging
import os
import sys

from relay_tooling.cli import admin_cmd, docker_cmd


def _usage() -> None:
    print("Usage: relay [--verbose] <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  admin reset          - Back up init.json and restart the relay to regenerate admin credentials",
        file=sys.stderr,
    )
    print(
        "  docker build-push    - Build multi-arch images with buildx and push (or --no-push to load)",
        file=sys.stderr,
    )


def _configure_logging(verbose: bool) -> None:
    name = "DEBUG" if verbose else os.environ.get("RELAY_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    """Main CLI entry point."""
    args = sys.argv[1:]
    verbose = False
    while args and args[0] in ("--verbose", "-V"):
        verbose = True
        args = args[1:]
    _configure_logging(verbose)

    if not args or args[0] in ("--help", "-h"):
        _usage()
        sys.exit(0 if args else 1)

    command, rest = args[0], args[1:]
    if command == "admin":
        admin_cmd.run_admin_argv(rest)
    elif command == "docker":
        docker_cmd.run_docker_argv(rest)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        _usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
