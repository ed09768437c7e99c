"""Custom exceptions for the parsing context."""

from typing import Any, Optional


class InvalidCandidateError(ValueError):
    """
    Raised when the caller supplies a malformed project candidate.

    The whole candidate list is rejected rather than matched partially, since
    a corrupt entry could be confidently but wrongly matched.

    Attributes:
        message: Error description
        index: Position of the offending entry in the candidate list
        entry: The offending entry itself
    """

    def __init__(self, message: str, index: Optional[int] = None, entry: Any = None):
        self.message = message
        self.index = index
        self.entry = entry

        parts = [message]
        if index is not None:
            parts.append(f"Candidate #{index}: {entry!r}")

        super().__init__("\n".join(parts))
