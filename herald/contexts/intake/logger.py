"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from herald.utils.logger import setup_logger as _setup_logger
from herald.utils.text_processing import truncate_display

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path, store_description: str = "") -> Path:
    """
    Setup logger for the intake context.

    Args:
        log_dir: Directory for this intake session
        store_description: Where candidate projects come from (provenance only)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="intake",
        log_dir=log_dir,
        extra_provenance={"Project store": store_description or "(unspecified)"},
    )


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_intake_start(user_id: str, text: str, skip_parsing: bool) -> None:
    """Log an incoming utterance."""
    mode = "verbatim" if skip_parsing else "parse"
    _log_info(f"Intake for user {user_id} ({mode}): {truncate_display(text, 80)!r}")


def log_candidates_loaded(user_id: str, count: int) -> None:
    """Log how many candidate projects the store returned."""
    _log_debug(f"Loaded {count} candidate project(s) for user {user_id}")


def log_store_failure(user_id: str, error: Exception) -> None:
    """Log a failed candidate fetch before it propagates."""
    _log_error(f"Candidate project fetch failed for user {user_id}: {type(error).__name__}: {error}")


def log_intake_result(draft) -> None:
    """
    Log the mapped task draft.

    Args:
        draft: TaskDraft from IntakeAdapter.parse_task_input()
    """
    parts = [f"name={draft.name!r}"]
    if draft.project_id:
        parts.append(f"project={draft.project_id} ({draft.parsing.project_source})")
    if draft.due_date:
        parts.append(f"due={draft.due_date.isoformat()}")
    if draft.scheduled_start:
        parts.append(f"scheduled={draft.scheduled_start.isoformat()}")
    _log_info("Task draft: " + ", ".join(parts))
