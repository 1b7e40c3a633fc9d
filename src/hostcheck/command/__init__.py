"""CLI command modules for hostcheck."""

from hostcheck.command.check import CheckCommand
from hostcheck.command.list import ListCommand
from hostcheck.command.run import RunCommand

__all__ = ["CheckCommand", "ListCommand", "RunCommand"]
