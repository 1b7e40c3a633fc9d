"""Uniform "wanted vs. found" failure messages."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

# Replaces the whole "Found: ..." line, so no found value can mimic it
NOTHING_FOUND = "Found nothing"


class Outcome(NamedTuple):
    """Answer returned by every check: (exit_code, exit_message)."""

    exit_code: int
    exit_message: str

    @property
    def passed(self) -> bool:
        return self.exit_code == 0


PASS = Outcome(0, "")


@dataclass(frozen=True)
class Diagnostic:
    """What a failing check looked for and what it saw instead."""

    label: str
    wanted: str
    found: tuple[str, ...]

    @classmethod
    def build(
        cls, label: str, wanted: str, found: Iterable[str]
    ) -> "Diagnostic":
        # Set-like, first occurrence keeps its position
        return cls(label, wanted, tuple(dict.fromkeys(found)))

    def render(self) -> str:
        if self.found:
            found = f"Found: {', '.join(self.found)}"
        else:
            found = NOTHING_FOUND
        return f"{self.label}\n\tWanted: {self.wanted}\n\t{found}"


def generic_error(label: str, wanted: str, found: Iterable[str]) -> Outcome:
    """Build the failing outcome for a check.

    Args:
        label: Short description of what went wrong
        wanted: The value the check was asked to find
        found: The values that were actually present

    Returns:
        Outcome(1, message) with label, wanted and found rendered
        on separate lines. An empty `found` renders as "Found nothing".
    """
    return Outcome(1, Diagnostic.build(label, wanted, found).render())
