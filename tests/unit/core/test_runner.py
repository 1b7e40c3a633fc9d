"""Tests for Runner."""

from hostcheck.core.runner import Runner


def test_successful_command():
    result = Runner().execute(["echo", "Hello World"])

    assert result.exited == 0
    assert "Hello World" in result.stdout


def test_failed_command_does_not_raise():
    result = Runner().execute(["false"])

    assert result.exited != 0


def test_arguments_are_quoted():
    """Arguments reach the program verbatim, not via the shell."""
    result = Runner().execute(["echo", "a;b", "$HOME", "*"])

    assert result.stdout.strip() == "a;b $HOME *"


def test_timeout_handling():
    result = Runner().execute(["sleep", "10"], timeout=1)

    assert result.exited == -1


def test_env_is_merged():
    result = Runner().execute(
        ["sh", "-c", "echo $HOSTCHECK_TEST_VALUE"],
        env={"HOSTCHECK_TEST_VALUE": "42"},
    )

    assert result.stdout.strip() == "42"
