"""List command - shows every registered check."""

import sys

from pydantic import BaseModel


def describe_checks(out=None) -> None:
    from hostcheck.checks import registry

    out = out or sys.stdout
    for definition in registry.definitions():
        params = " ".join(f"<{p}>" for p in definition.parameters)
        print(f"{definition.name} {params}".rstrip(), file=out)
        if definition.description:
            print(f"    {definition.description}", file=out)


class ListCommand(BaseModel):
    """List the available checks and their parameters."""

    def execute(self, state) -> int:  # noqa: ARG002
        describe_checks()
        return 0
