"""Result types for check execution."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class CheckResult(BaseModel):
    """Result of one check invocation, as reported by the CLI."""

    check_name: str
    parameters: list[str] = Field(default_factory=list)
    exit_code: int
    exit_message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)

    @model_validator(mode='after')
    def _message_matches_code(self) -> 'CheckResult':
        if self.exit_code == 0 and self.exit_message:
            raise ValueError("A passing check carries no message")
        if self.exit_code != 0 and not self.exit_message:
            raise ValueError("A failing check must explain itself")
        return self

    @property
    def success(self) -> bool:
        return self.exit_code == 0
