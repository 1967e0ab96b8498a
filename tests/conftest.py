"""Shared test fixtures."""

import pytest
import structlog

CONFIG_VARS = ("BALLOT_ADMIN", "BALLOT_LOG_LEVEL", "BALLOT_LOG_FORMAT")


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI runs reconfigure structlog against captured streams; undo that."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    """Remove ballot settings from the environment and isolate from any .env.

    Setting before deleting makes monkeypatch restore the variables to
    "absent" even if load_dotenv() writes them during the test.
    """
    for name in CONFIG_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
