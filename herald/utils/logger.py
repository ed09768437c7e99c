"""
Session logging for HERALD.

A session writes every record to ``<log_dir>/<context>.log`` and echoes the
important ones to stderr, so stdout stays free for command output (the dev
script prints JSON there). Context-specific prefixes live in
contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[dict] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output to a session log file and stderr.

    Args:
        context_name: Log file stem (e.g., "parse", "intake")
        log_dir: Directory for this session, created if missing
        extra_provenance: Additional key-value pairs for the session header
        console_level: Minimum level echoed to stderr

    Returns:
        Path to log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_session_header(extra_provenance)
    return log_file


def log_session_header(extra_context: Optional[dict] = None) -> None:
    """Record how this session was started (command, cwd, interpreter) plus extra context."""
    header = {
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }
    logger.info("-" * 60)
    for key, value in header.items():
        logger.info(f"{key}: {value}")
    logger.info("-" * 60)
