"""Command execution using invoke."""

import shlex

from invoke import Context, Result
from invoke.exceptions import CommandTimedOut

from hostcheck.core.log import logger


class Runner(Context):
    """Wrapper around invoke.Context for read-only host probes.

    Output is always captured rather than echoed, and a non-zero
    exit never raises: the caller inspects `Result.exited` and
    decides what the failure means.
    """

    def execute(
        self,
        argv: list[str],
        timeout: int | None = None,
        env: dict[str, str] | None = None,
    ) -> Result:
        """Run a program and capture its output.

        Args:
            argv: Program followed by its arguments
            timeout: Maximum execution time in seconds
            env: Extra environment variables (merged into
                os.environ)

        Returns:
            invoke.Result with stdout, stderr and exited. A
            timed-out command is reported with exited == -1.
        """
        command = shlex.join(argv)
        kwargs = {
            "hide": True,
            "warn": True,
            "in_stream": False,
        }
        if timeout:
            kwargs["timeout"] = timeout
        if env:
            kwargs["env"] = env

        logger.spew("Running command", command=command, timeout=timeout)
        try:
            result = self.run(command, **kwargs)
        except CommandTimedOut as e:
            result = e.result
            result.exited = -1

        logger.spew(
            "Command finished",
            command=command,
            exited=result.exited,
        )
        return result
