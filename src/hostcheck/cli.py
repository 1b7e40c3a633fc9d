#!/usr/bin/env python3
"""hostcheck CLI - assert facts about the running host."""

import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from hostcheck.command.check import CheckCommand
from hostcheck.command.list import ListCommand
from hostcheck.command.run import RunCommand
from hostcheck.core.config import State
from hostcheck.core.log import logger


class CliState(State):
    """Assert facts about the running host: pulled Docker images,
    open ports, group membership, routes and more.

    Each check answers yes or no. Failed checks print what was
    wanted and what was found; a data source that cannot be read
    stops the whole run.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.run_name value)
    2. hostcheck.yaml in the current directory and --include files
    3. .env file
    4. Environment variables (HOSTCHECK_CONFIG__RUN_NAME=value)
    """

    run: CliSubCommand[RunCommand]
    check: CliSubCommand[CheckCommand]
    list: CliSubCommand[ListCommand]

    def cli_cmd(self):
        """Dispatch to the active subcommand, or show help."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        # Closes log files on the way out
        with logger:
            exit_code = subcommand.execute(self)
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
