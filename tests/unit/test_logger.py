"""Unit tests for session logging setup."""

import sys

import pytest
from loguru import logger

from herald.contexts.intake.logger import setup_intake_logger
from herald.utils.logger import setup_logger


@pytest.fixture(autouse=True)
def restore_default_sink():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_session_file_holds_header_and_debug_records(tmp_path):
    """Test that the log file gets the header, extra context and DEBUG records."""
    log_file = setup_logger("parse", tmp_path / "session", extra_provenance={"Run": "nightly"})
    logger.debug("resolved tomorrow")
    logger.remove()

    content = log_file.read_text()
    assert log_file == tmp_path / "session" / "parse.log"
    assert "Command:" in content
    assert "Run: nightly" in content
    assert "resolved tomorrow" in content


@pytest.mark.unit
def test_console_output_goes_to_stderr_only(tmp_path, capsys):
    """Test that stdout stays clean and stderr respects the console level."""
    setup_logger("parse", tmp_path, console_level="WARNING")
    logger.info("quiet")
    logger.warning("loud")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "loud" in captured.err
    assert "quiet" not in captured.err


@pytest.mark.unit
def test_intake_logger_records_store(tmp_path):
    """Test that the intake session header names the project store."""
    log_file = setup_intake_logger(tmp_path, store_description="projects.db")
    logger.remove()

    assert "Project store: projects.db" in log_file.read_text()
