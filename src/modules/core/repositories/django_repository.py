"""Django ORM base repository.

Concrete repositories set ``model`` and, where reads must join related
rows, override ``get_queryset``.  Error handling follows the Null Object
pattern: look-ups return ``None`` for missing rows *and* for malformed
ids, so the Service Layer decides how to surface a missing entity.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.core.outbox import record_domain_events
from modules.core.repositories.interfaces import IRepository

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=models.Model)


class DjangoRepository(IRepository[M], Generic[M]):
    """Shared CRUD plumbing on top of Django's QuerySet API."""

    model: ClassVar[Type[models.Model]]
    outbox_topic: ClassVar[Optional[str]] = None

    def get_queryset(self) -> models.QuerySet:
        return self.model.objects.all()

    def _label(self) -> str:
        return self.model._meta.model_name

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: Any) -> Optional[M]:
        if id is None:
            return None
        try:
            return self.get_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: Any) -> Optional[M]:
        """Lock the row for the rest of the surrounding atomic block."""
        if id is None:
            return None
        try:
            return self.model.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[M]:
        queryset = self.get_queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: M) -> M:
        """Persist an entity and flush its collected domain events."""
        entity.save()
        if self.outbox_topic:
            record_domain_events(entity, topic=self.outbox_topic)
        logger.info(f"{self._label()}.saved", entity_id=str(entity.pk))
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        entity = self.get_by_id(id)
        if entity is None:
            return False
        entity.delete()
        logger.info(f"{self._label()}.deleted", entity_id=str(id))
        return True
