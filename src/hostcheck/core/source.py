"""Output sources: where a check gets its raw text from.

A source is a plain value naming a file or a command. Checks never
open files or spawn processes directly; they hand a source to a
SourceReader, which tests replace with a stub holding canned text.
"""

from dataclasses import dataclass, field
from pathlib import Path

from hostcheck.core.errors import PermissionDenied, SourceUnavailable
from hostcheck.core.log import logger
from hostcheck.core.runner import Runner


@dataclass(frozen=True)
class FileSource:
    """Contents of a file, e.g. /etc/group."""

    path: Path

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class CommandSource:
    """Combined stdout and stderr of a command, e.g. `route -n`."""

    program: str
    args: tuple[str, ...] = field(default_factory=tuple)
    timeout: int | None = None

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


OutputSource = FileSource | CommandSource


class SourceReader:
    """Reads raw text from an OutputSource.

    Any failure is an environment failure: there is no retry and
    no fallback source.
    """

    def __init__(self, runner: Runner | None = None,
                 command_timeout: int | None = None):
        """Initialize reader.

        Args:
            runner: Runner used for command sources
            command_timeout: Timeout in seconds applied to command
                sources that do not set their own
        """
        self.runner = runner or Runner()
        self.command_timeout = command_timeout

    def read(self, source: OutputSource) -> str:
        """Return the raw text of a source.

        Raises:
            PermissionDenied: The process lacks access to the source
            SourceUnavailable: The file is unreadable or the command
                failed
        """
        if isinstance(source, FileSource):
            return self._read_file(source)
        if isinstance(source, CommandSource):
            return self._read_command(source)
        raise TypeError(f"Not an output source: {source!r}")

    def _read_file(self, source: FileSource) -> str:
        logger.debug("Reading file", path=str(source.path))
        try:
            return Path(source.path).read_text(errors="replace")
        except PermissionError as e:
            raise PermissionDenied(
                f"Permission denied when reading: {source.path}"
            ) from e
        except OSError as e:
            raise SourceUnavailable(
                f"Could not read file: {source.path}\n\t{e}"
            ) from e

    def _read_command(self, source: CommandSource) -> str:
        logger.debug("Running command", command=str(source))
        timeout = source.timeout or self.command_timeout
        try:
            result = self.runner.execute(source.argv, timeout=timeout)
        except OSError as e:
            raise SourceUnavailable(
                f"Could not start `{source}`\n\t{e}"
            ) from e

        output = result.stdout + result.stderr
        if result.exited == 0:
            return output
        if "permission denied" in output.lower():
            raise PermissionDenied(
                f"Permission denied when running: {source}"
            )
        if result.exited == -1:
            raise SourceUnavailable(
                f"Timed out after {timeout}s running `{source}`"
            )
        raise SourceUnavailable(
            f"Error while running `{source}` "
            f"(exit {result.exited})\n\t{output.strip()}"
        )


__all__ = [
    "CommandSource",
    "FileSource",
    "OutputSource",
    "SourceReader",
]
