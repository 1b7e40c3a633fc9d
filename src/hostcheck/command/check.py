"""Check command - runs a single named check."""

from pydantic import BaseModel, Field

from hostcheck.command.run import run_checks
from hostcheck.core.source import SourceReader


class CheckCommand(BaseModel):
    """Run one check by name, e.g.
    `hostcheck check --name UserInGroup --parameters '["alice","sudo"]'`.
    """

    name: str = Field(description="Registered check name (see `hostcheck list`)")
    parameters: list[str] = Field(
        default_factory=list,
        description="Positional parameters for the check, in order",
    )

    def execute(self, state) -> int:
        reader = SourceReader(command_timeout=state.config.command_timeout)
        return run_checks([(self.name, self.parameters)], reader)
