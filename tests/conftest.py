"""Pytest configuration and fixtures for hostcheck tests."""

import sys
import tempfile
from pathlib import Path

import pytest

from hostcheck.core.errors import SourceUnavailable
from hostcheck.core.log import ConsoleSink, setup_logger
from hostcheck.core.source import SourceReader


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Console-only logging at debug level for the whole session."""
    test_log_root = Path(tempfile.gettempdir()) / "hostcheck-tests"
    setup_logger(
        log_root=test_log_root,
        run_name="test",
        console=ConsoleSink(level="debug"),
    )


class StubReader(SourceReader):
    """SourceReader serving canned text instead of touching the host.

    Reading a source that was not given raises SourceUnavailable,
    the same as a missing file would.
    """

    def __init__(self, outputs: dict):
        super().__init__(runner=object())
        self.outputs = outputs
        self.reads = []

    def read(self, source):
        self.reads.append(source)
        if source not in self.outputs:
            raise SourceUnavailable(f"No canned output for {source}")
        return self.outputs[source]


@pytest.fixture
def stub_reader():
    """Factory: stub_reader({SOURCE: "text", ...})."""
    return StubReader


@pytest.fixture(scope="session")
def test_config():
    """Load configuration with defaults only.

    sys.argv is replaced so pytest's own arguments are not read
    as --include files.
    """
    from hostcheck.core.config import State

    old_argv = sys.argv
    sys.argv = ['hostcheck']
    try:
        return State().config
    finally:
        sys.argv = old_argv
