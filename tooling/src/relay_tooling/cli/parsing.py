"""argparse parser shared by relay subcommands: bad flags print usage and exit 1."""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from relay_tooling import console


class UsageExitParser(argparse.ArgumentParser):
    """Unknown flag or missing value: print error and usage, exit 1."""

    def error(self, message: str) -> NoReturn:
        console.error(message)
        self.print_help(sys.stderr)
        sys.exit(1)
