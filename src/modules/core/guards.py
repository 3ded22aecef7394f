"""Guards executed before every mutation.

- ``ensure_exists``: reference validator for foreign ids.
- ``assert_unique``: code uniqueness within a scope, excluding the
  entity being renamed.
- ``GuardResult`` / ``require_deletable``: deletion policy outcome and
  its enforcement.

Guards are read-only.  When one fails inside ``transaction.atomic`` the
raised error rolls the whole block back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, TypeVar

from modules.core.exceptions import DependencyConflict, NotFound, UniquenessConflict

T_co = TypeVar("T_co", covariant=True)


class SupportsGetById(Protocol[T_co]):
    def get_by_id(self, id: Any) -> Optional[T_co]: ...


def ensure_exists(repository: SupportsGetById[T_co], entity_type: str, id: Any) -> T_co:
    """Return the entity behind *id* or raise ``NotFound``."""
    entity = repository.get_by_id(id)
    if entity is None:
        raise NotFound(entity_type, id)
    return entity


def assert_unique(
    entity_type: str,
    code: str,
    clash: Optional[Any],
    excluding_id: Any = None,
    scope: Optional[str] = None,
) -> None:
    """Raise ``UniquenessConflict`` when *clash* is another entity.

    *clash* is whatever the scoped ``get_by_code`` look-up returned.
    """
    if clash is None:
        return
    if excluding_id is not None and str(clash.id) == str(excluding_id):
        return
    raise UniquenessConflict(entity_type, code, scope)


@dataclass(frozen=True)
class GuardResult:
    """Outcome of a deletion policy check."""

    ok: bool
    reason: str = ""

    @classmethod
    def allow(cls) -> GuardResult:
        return cls(ok=True)

    @classmethod
    def deny(cls, reason: str) -> GuardResult:
        return cls(ok=False, reason=reason)


def require_deletable(entity_type: str, entity_id: Any, result: GuardResult) -> None:
    """Raise ``DependencyConflict`` when the policy denied the delete."""
    if not result.ok:
        raise DependencyConflict(entity_type, entity_id, result.reason)
