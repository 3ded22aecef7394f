"""Domain error taxonomy shared by every module.

Raised by the Service Layer when a guard rejects an operation.  Each
error carries an explicit ``kind`` so the API layer can map it to a
response without relying on the concrete class:

- ``NOT_FOUND``: a referenced entity is absent.
- ``CONFLICT``: uniqueness or dependency conflicts.
- ``BAD_REQUEST``: terminal-state or invalid-transition violations.
- ``FAILURE``: unexpected store error, message kept opaque.
"""

from __future__ import annotations

import functools
from enum import StrEnum
from typing import Any, Callable, Optional, TypeVar

import structlog
from django.db import DatabaseError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BAD_REQUEST = "bad_request"
    FAILURE = "failure"


class DomainError(Exception):
    """Base class for every error raised by a guard or the state engine."""

    kind: ErrorKind = ErrorKind.FAILURE
    code: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(DomainError):
    """A referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND
    code = "not_found"

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id} not found.")


class Conflict(DomainError):
    """The operation clashes with existing state."""

    kind = ErrorKind.CONFLICT
    code = "conflict"


class UniquenessConflict(Conflict):
    """A code is already taken within its uniqueness scope."""

    code = "duplicate_code"

    def __init__(
        self, entity_type: str, value: str, scope: Optional[str] = None
    ) -> None:
        self.entity_type = entity_type
        self.value = value
        self.scope = scope
        where = f" within {scope}" if scope else ""
        super().__init__(f"{entity_type} '{value}' already exists{where}.")


class DependencyConflict(Conflict):
    """A delete was blocked by dependent rows or a non-deletable phase."""

    code = "dependency_conflict"

    def __init__(self, entity_type: str, entity_id: Any, reason: str) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"Cannot delete {entity_type} {entity_id}: {reason}.")


class TerminalStateViolation(Conflict):
    """A mutation targeted an entity already in a terminal state.

    Listed under ``Conflict`` but surfaced as a bad request.
    """

    kind = ErrorKind.BAD_REQUEST
    code = "terminal_state"

    def __init__(self, entity_type: str, entity_id: Any, status: str) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.status = status
        super().__init__(
            f"{entity_type} {entity_id} is {status} and can no longer be changed."
        )


class InvalidTransition(DomainError):
    """The requested status is not reachable from the current one."""

    kind = ErrorKind.BAD_REQUEST
    code = "invalid_transition"

    def __init__(
        self,
        entity_type: str,
        current: str,
        requested: str,
        message: Optional[str] = None,
    ) -> None:
        self.entity_type = entity_type
        self.current = current
        self.requested = requested
        super().__init__(
            message
            or f"Cannot transition {entity_type} from {current} to {requested}."
        )


class GenericFailure(DomainError):
    """Opaque wrapper around an unexpected store error."""

    kind = ErrorKind.FAILURE
    code = "operation_failed"


def wrap_store_errors(message: str) -> Callable[[F], F]:
    """Rewrap unexpected store errors into a single ``GenericFailure``.

    Domain errors propagate unchanged.  Apply it *outside*
    ``transaction.atomic`` so the rollback has already happened when the
    failure is raised.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except DatabaseError as exc:
                logger.exception("service.store_error", operation=func.__qualname__)
                raise GenericFailure(message) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
