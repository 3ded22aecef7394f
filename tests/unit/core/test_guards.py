"""Unit tests for reference, uniqueness and deletion guards."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.core.exceptions import (
    DependencyConflict,
    ErrorKind,
    NotFound,
    UniquenessConflict,
)
from modules.core.guards import (
    GuardResult,
    assert_unique,
    ensure_exists,
    require_deletable,
)

pytestmark = pytest.mark.unit


class TestEnsureExists:
    def test_returns_entity(self):
        entity = SimpleNamespace(id=uuid4())
        repo = MagicMock()
        repo.get_by_id.return_value = entity
        assert ensure_exists(repo, "Shop", entity.id) is entity

    def test_missing_entity_raises_not_found(self):
        repo = MagicMock()
        repo.get_by_id.return_value = None
        missing = uuid4()
        with pytest.raises(NotFound) as exc_info:
            ensure_exists(repo, "DeliverySlot", missing)
        assert exc_info.value.kind == ErrorKind.NOT_FOUND
        assert exc_info.value.entity_type == "DeliverySlot"
        assert exc_info.value.entity_id == missing


class TestAssertUnique:
    def test_no_clash_passes(self):
        assert_unique("Shop", "TKY-01", None)

    def test_clash_raises_conflict(self):
        clash = SimpleNamespace(id=uuid4())
        with pytest.raises(UniquenessConflict) as exc_info:
            assert_unique("Shop", "TKY-01", clash)
        assert exc_info.value.kind == ErrorKind.CONFLICT
        assert "TKY-01" in exc_info.value.message

    def test_clash_with_itself_is_ignored(self):
        entity_id = uuid4()
        assert_unique("Shop", "TKY-01", SimpleNamespace(id=entity_id), excluding_id=entity_id)

    def test_excluding_id_compares_as_string(self):
        entity_id = uuid4()
        assert_unique(
            "Shop", "TKY-01", SimpleNamespace(id=entity_id), excluding_id=str(entity_id)
        )

    def test_scope_is_reported(self):
        with pytest.raises(UniquenessConflict) as exc_info:
            assert_unique(
                "DeliverySlot",
                "AM",
                SimpleNamespace(id=uuid4()),
                scope="delivery method STD",
            )
        assert exc_info.value.scope == "delivery method STD"
        assert "within delivery method STD" in exc_info.value.message


class TestRequireDeletable:
    def test_allowed_result_passes(self):
        require_deletable("Order", uuid4(), GuardResult.allow())

    def test_denied_result_raises_dependency_conflict(self):
        entity_id = uuid4()
        with pytest.raises(DependencyConflict) as exc_info:
            require_deletable("Shop", entity_id, GuardResult.deny("shop has orders"))
        assert exc_info.value.reason == "shop has orders"
        assert exc_info.value.kind == ErrorKind.CONFLICT
