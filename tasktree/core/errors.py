"""Error types raised at the repository boundary and helpers for user-facing messages."""

from enum import Enum


class ErrorCategory(Enum):
    """Categories of failures surfaced by the cache layer."""

    REPOSITORY_FAILURE = "repository_failure"
    RECORD_NOT_FOUND = "record_not_found"
    UNKNOWN = "unknown"


class TaskTreeError(Exception):
    """Base class for errors raised by tasktree."""


class RepositoryError(TaskTreeError):
    """A repository call (create/update/delete/list/tree) was rejected."""


class RecordNotFoundError(RepositoryError):
    """The repository has no record with the requested id."""

    def __init__(self, collection: str, record_id: int) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"Record not found in {collection}: {record_id}")


def error_message(exception: BaseException, fallback: str) -> str:
    """Return the exception's own message, or ``fallback`` when it has none.

    Args:
        exception: The exception raised by a repository call
        fallback: Message used when the exception carries no text

    Returns:
        Human-readable message suitable for a notification or inline error
    """
    message = str(exception).strip()
    return message or fallback


def classify_error(exception: BaseException) -> ErrorCategory:
    """Map an exception onto an ErrorCategory for logging context."""
    if isinstance(exception, RecordNotFoundError):
        return ErrorCategory.RECORD_NOT_FOUND
    if isinstance(exception, RepositoryError):
        return ErrorCategory.REPOSITORY_FAILURE
    return ErrorCategory.UNKNOWN
