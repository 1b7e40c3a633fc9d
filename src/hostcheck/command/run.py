"""Run command - executes the configured checklist."""

import sys

from pydantic import BaseModel

from hostcheck.core.errors import EnvironmentFailure
from hostcheck.core.log import logger
from hostcheck.core.result import CheckResult
from hostcheck.core.source import SourceReader

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ENVIRONMENT = 2


def run_checks(
    specs: list[tuple[str, list[str]]],
    reader: SourceReader,
    out=None,
) -> int:
    """Run checks in order and report each one.

    Stops at the first environment failure: a check that cannot
    trust its inputs cannot answer, and neither can the run.

    Args:
        specs: (check name, parameters) pairs
        reader: Source reader shared by the checks of this run
        out: Stream for the report (stdout by default)

    Returns:
        0 if every check passed, 1 if any failed, 2 on an
        environment failure
    """
    from hostcheck.checks import registry

    out = out or sys.stdout
    failed = 0
    for name, parameters in specs:
        label = " ".join([name, *parameters])
        try:
            outcome = registry.run(name, parameters, reader=reader)
        except EnvironmentFailure as e:
            logger.error(
                "Environment failure, aborting run",
                check=name,
                parameters=parameters,
                error=str(e),
            )
            print(f"ERROR {label}\n\t{e}", file=sys.stderr)
            return EXIT_ENVIRONMENT

        result = CheckResult(
            check_name=name,
            parameters=parameters,
            exit_code=outcome.exit_code,
            exit_message=outcome.exit_message,
        )
        if result.success:
            print(f"PASS {label}", file=out)
        else:
            failed += 1
            message = result.exit_message.replace("\n", "\n\t")
            print(f"FAIL {label}\n\t{message}", file=out)

    logger.info(
        "Check run complete", total=len(specs), failed=failed
    )
    return EXIT_FAILED if failed else EXIT_PASSED


class RunCommand(BaseModel):
    """Run every check listed under config.checks, in order.

    Exits 0 when all checks pass, 1 when any fail, and 2 when a
    data source or parameter problem stops the run.
    """

    def execute(self, state) -> int:
        checks = state.config.checks
        if not checks:
            logger.warn("No checks configured (config.checks is empty)")
        reader = SourceReader(command_timeout=state.config.command_timeout)
        return run_checks(
            [(spec.check, spec.parameters) for spec in checks], reader
        )
