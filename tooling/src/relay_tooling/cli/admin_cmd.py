"""`relay admin` subcommands: reset."""

from __future__ import annotations

import sys
from pathlib import Path

from relay_tooling.admin.reset import run as run_reset
from relay_tooling.cli.parsing import UsageExitParser


def run_reset_argv(argv: list[str]) -> int:
    ap = UsageExitParser(
        prog="relay admin reset",
        description="Back up and delete data/init.json, then restart the relay so it "
        "re-creates admin credentials from .env",
    )
    ap.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Directory containing docker-compose.yml (default: cwd)",
    )
    ap.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    args = ap.parse_args(argv)
    project_root = (args.project_root or Path.cwd()).resolve()
    return run_reset(project_root, assume_yes=args.yes)


def run_admin_argv(argv: list[str] | None = None) -> None:
    """Parse admin subcommand from argv and run. argv defaults to sys.argv[2:] when called from main."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    if not argv:
        print("relay admin: missing subcommand (reset)", file=sys.stderr)
        sys.exit(1)
    cmd = argv[0]
    rest = argv[1:]

    if cmd == "reset":
        sys.exit(run_reset_argv(rest))

    print(f"Unknown admin subcommand: {cmd}", file=sys.stderr)
    sys.exit(1)
