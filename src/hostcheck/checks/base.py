"""The check contract and the registry checks are published in.

A check is a plain function taking its positional string
parameters (and optionally a SourceReader) and returning an
Outcome. Passing means Outcome(0, ""); failing means an Outcome
built by generic_error(). Anything that stops the check from
answering raises an EnvironmentFailure instead.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from hostcheck.core.diagnostic import Outcome
from hostcheck.core.errors import ParameterError, UnknownCheck
from hostcheck.core.log import logger
from hostcheck.core.source import OutputSource, SourceReader
from hostcheck.tabular import WHITESPACE, SeparatorPolicy, Table, column, tokenize

CheckFunction = Callable[..., Outcome]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_DURATION_PART_RE = re.compile(r"([0-9]*\.?[0-9]+)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


@dataclass(frozen=True)
class CheckDefinition:
    """A registered check: its public name, function and parameters."""

    name: str
    func: CheckFunction
    parameters: tuple[str, ...]
    description: str = ""


class CheckRegistry:
    """Maps public check names ("Port", "UserInGroup") to checks."""

    def __init__(self):
        self._checks: dict[str, CheckDefinition] = {}

    def register(self, definition: CheckDefinition) -> None:
        if definition.name in self._checks:
            raise ValueError(f"Check already registered: {definition.name}")
        self._checks[definition.name] = definition

    def get(self, name: str) -> CheckDefinition:
        """Retrieve a check by name.

        Raises:
            UnknownCheck: If nothing is registered under `name`
        """
        try:
            return self._checks[name]
        except KeyError:
            raise UnknownCheck(f"Unknown check: {name}") from None

    def names(self) -> list[str]:
        return sorted(self._checks)

    def definitions(self) -> list[CheckDefinition]:
        return [self._checks[name] for name in self.names()]

    def run(
        self,
        name: str,
        parameters: list[str],
        reader: SourceReader | None = None,
    ) -> Outcome:
        """Run one check.

        Args:
            name: Public check name
            parameters: Positional string parameters
            reader: Source reader handed to the check (a default
                one is created when omitted)

        Returns:
            The check's Outcome

        Raises:
            UnknownCheck: If the name is not registered
            ParameterError: If the parameter count is wrong
            EnvironmentFailure: Whatever the check itself raises
        """
        definition = self.get(name)
        require_parameters(definition, parameters)
        outcome = definition.func(list(parameters), reader=reader)
        if outcome.passed:
            logger.info(f"{name} passed", check=name, parameters=parameters)
        else:
            logger.warn(
                f"{name} failed",
                check=name,
                parameters=parameters,
                exit_message=outcome.exit_message,
            )
        return outcome


registry = CheckRegistry()


def check(name: str, *parameters: str):
    """Register a function as a check under `name`.

    Args:
        name: Public name used by checklists and the CLI
        *parameters: Names of the positional parameters, in order
    """
    def decorator(func: CheckFunction) -> CheckFunction:
        doc = (func.__doc__ or "").strip().splitlines()
        registry.register(CheckDefinition(
            name=name,
            func=func,
            parameters=parameters,
            description=doc[0] if doc else "",
        ))
        return func
    return decorator


def require_parameters(
    definition: CheckDefinition, parameters: list[str]
) -> None:
    """Raise ParameterError unless the parameter count matches."""
    if len(parameters) != len(definition.parameters):
        expected = ", ".join(definition.parameters) or "none"
        raise ParameterError(
            f"{definition.name} takes {len(definition.parameters)} "
            f"parameter(s) ({expected}), got {len(parameters)}: "
            f"{parameters}"
        )


def is_integer(value: str, signed: bool = True) -> bool:
    """True if `value` is a plain ASCII decimal integer.

    Unlike str.isdigit(), digits such as "²" do not count.
    """
    pattern = _INT_RE if signed else _UNSIGNED_RE
    return pattern.fullmatch(value) is not None


def parse_int(value: str) -> int:
    """Strict decimal integer parse.

    Accepts an optional sign followed by digits and nothing else
    (no surrounding spaces, underscores or other bases).

    Raises:
        ParameterError: If `value` is not such an integer
    """
    if not is_integer(value):
        raise ParameterError(f"Could not parse integer: {value!r}")
    return int(value)


def parse_duration(value: str) -> float:
    """Parse a duration such as "500ms", "3s" or "1m30s" into seconds.

    A bare "0" is accepted. Units: ns, us (or µs), ms, s, m, h.

    Raises:
        ParameterError: If `value` is not a valid duration
    """
    text = value.strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return 0.0

    seconds = 0.0
    position = 0
    for match in _DURATION_PART_RE.finditer(text):
        if match.start() != position:
            break
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    if not text or position != len(text):
        raise ParameterError(f"Could not parse duration: {value!r}")
    return sign * seconds


def read_table(
    source: OutputSource,
    policy: SeparatorPolicy = WHITESPACE,
    reader: SourceReader | None = None,
    min_fields: int = 0,
) -> Table:
    """Read a source and tokenize it."""
    text = (reader or SourceReader()).read(source)
    return tokenize(text, policy, min_fields=min_fields)


def source_column(
    source: OutputSource,
    index: int,
    policy: SeparatorPolicy = WHITESPACE,
    reader: SourceReader | None = None,
) -> list[str]:
    """One column of a source that prints a single header row."""
    return column(read_table(source, policy, reader), index, skip_header=True)
