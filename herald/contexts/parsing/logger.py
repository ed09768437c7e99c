"""
Parsing context logger.

Provides logging interface for the parsing context with automatic [parse] prefix.
All parsing modules should import from this module, not from loguru directly.

Parsing runs once per incoming task, so everything here logs at DEBUG unless
something is genuinely wrong with the caller's input.
"""

from pathlib import Path

from loguru import logger

from herald.utils.logger import setup_logger as _setup_logger
from herald.utils.text_processing import truncate_display

CONTEXT_PREFIX = "[parse]"


def setup_parsing_logger(log_dir: Path) -> Path:
    """
    Setup logger for the parsing context.

    Args:
        log_dir: Directory for this parsing session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="parse", log_dir=log_dir)


# Wrapper functions with automatic [parse] prefix


def _log_debug(message: str) -> None:
    """Log debug message with [parse] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [parse] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


# High-level parsing-specific logging helpers


def log_date_found(phrase: str, kind: str, instant, connector: str | None) -> None:
    """Log a recognized date phrase and how it was classified."""
    via = f" (connector {connector!r})" if connector else ""
    _log_debug(f"Date phrase {phrase!r} -> {kind} at {instant.isoformat()}{via}")


def log_project_rejected(fragment: str, best_name: str | None, distance: float) -> None:
    """Log a captured fragment whose best candidate missed the threshold."""
    _log_debug(
        f"Fragment {fragment!r} rejected (best {best_name!r}, distance {distance:.3f})"
    )


def log_project_matched(fragment: str, name: str, distance: float) -> None:
    """Log an accepted project match."""
    _log_debug(f"Fragment {fragment!r} matched project {name!r} (distance {distance:.3f})")


def log_parse_result(original: str, title: str) -> None:
    """Log the final title derived from an utterance."""
    _log_debug(f"Parsed {truncate_display(original, 60)!r} -> title {title!r}")


def log_date_unresolvable(phrase: str, error: Exception) -> None:
    """Log a date-shaped phrase that names no real instant (e.g. "2/30")."""
    _log_warning(f"Ignoring date phrase {phrase!r}: {error}")
