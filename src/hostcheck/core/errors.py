"""Environment failures raised by the check core.

An assertion that turns out false is an ordinary return value.
Everything here means the check could not answer at all: its data
source was unreadable, or the caller handed it a bad parameter. The
dispatcher stops the whole run when one of these escapes a check.
"""


class EnvironmentFailure(Exception):
    """Base class for failures that abort a check run."""


class SourceUnavailable(EnvironmentFailure):
    """A file could not be read or a command did not succeed."""


class PermissionDenied(SourceUnavailable):
    """The data source refused access to the current process."""


class ParameterError(EnvironmentFailure):
    """A check parameter was missing or malformed."""


class UnsupportedValue(EnvironmentFailure):
    """A parameter named an IP version or protocol we do not handle."""


class UnknownCheck(EnvironmentFailure):
    """No check is registered under the requested name."""


__all__ = [
    "EnvironmentFailure",
    "SourceUnavailable",
    "PermissionDenied",
    "ParameterError",
    "UnsupportedValue",
    "UnknownCheck",
]
