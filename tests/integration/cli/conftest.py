"""Fixtures for CLI integration tests"""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    """Run each command from tmp_path against a throwaway SQLite file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CORTEX_DB_URL", f"sqlite:///{tmp_path}/test.db")
    monkeypatch.setenv("CORTEX_LOG_LEVEL", "WARNING")
    yield
    # setup_logging binds a handler to the runner's stderr; drop it between tests
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture(name="notes_dir")
def notes_dir_fixture(tmp_path):
    notes = tmp_path / "notes"
    notes.mkdir()
    (notes / "a.md").write_text("# Alpha\n\n- [ ] call Bob\n\n```sh\nls -la\n```\n")
    (notes / "b.txt").write_text("just a line\n")
    return notes
