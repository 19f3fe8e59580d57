"""Error Taxonomy - closed error kinds owned by the storage and service layers.

Invariants:
    - StorageError is raised only by infrastructure (session manager, repositories)
    - ApplicationError is raised only by services; its HTTP code derives from its kind
    - Every failure is identified by an Enum kind; callers switch on kind, never on class name
    - ApplicationError messages are safe to show to API clients, StorageError messages are not

Design Decisions:
    - Two closed kind enums instead of an open subclass tree: a new kind forces every
      `match` over it to be revisited (ADR: exhaustive error mapping)
    - http_status lives on ApplicationErrorKind so kind and code can never disagree
"""

from enum import Enum
from typing import assert_never


class StorageErrorKind(str, Enum):
    """Failure classes reported by the backing store."""
    UNIQUE_VIOLATION = "unique_violation"
    UNKNOWN = "unknown"


class ApplicationErrorKind(str, Enum):
    """Failure classes a use case can report to its caller."""
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        match self:
            case ApplicationErrorKind.INVALID_INPUT:
                return 400
            case ApplicationErrorKind.CONFLICT:
                return 409
            case ApplicationErrorKind.INTERNAL:
                return 500
            case _ as unreachable:
                assert_never(unreachable)


class UserbaseError(Exception):
    """Base exception for all userbase errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(UserbaseError):
    """A store operation failed. Never forwarded past the service layer."""

    def __init__(
        self,
        kind: StorageErrorKind,
        message: str,
        operation: str = "unknown",
    ):
        super().__init__(message)
        self.kind = kind
        self.operation = operation

    def __repr__(self) -> str:
        return (
            f"StorageError(kind={self.kind.value!r}, "
            f"operation={self.operation!r}, message={self.message!r})"
        )


class ApplicationError(UserbaseError):
    """A use case failed with a client-safe message."""

    def __init__(self, kind: ApplicationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    @property
    def code(self) -> int:
        return self.kind.http_status

    def __repr__(self) -> str:
        return (
            f"ApplicationError(kind={self.kind.value!r}, "
            f"code={self.code}, message={self.message!r})"
        )
