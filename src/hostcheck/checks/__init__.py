"""Domain checks.

Importing this package registers every check with `registry`.
"""

from hostcheck.checks import docker, network, users  # noqa: F401
from hostcheck.checks.base import (
    CheckDefinition,
    CheckRegistry,
    check,
    parse_duration,
    parse_int,
    registry,
)

__all__ = [
    "CheckDefinition",
    "CheckRegistry",
    "check",
    "parse_duration",
    "parse_int",
    "registry",
]
