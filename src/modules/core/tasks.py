"""Async tasks of the core module."""

import structlog
from celery import shared_task
from django.conf import settings

from modules.core.models import OutboxEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


@shared_task(name="core.publish_outbox_events")
def publish_outbox_events(batch_size: int | None = None) -> dict:
    """Hand dispatchable outbox rows to the event bus, oldest first."""
    batch_size = batch_size or settings.OUTBOX_BATCH_SIZE
    published = failed = 0
    batch = OutboxEvent.objects.dispatchable(settings.OUTBOX_MAX_RETRIES)[:batch_size]
    for outbox_event in batch:
        log = logger.bind(
            outbox_id=str(outbox_event.id),
            event_type=outbox_event.event_type,
            aggregate_id=outbox_event.aggregate_id,
        )
        try:
            event_bus.publish_serialized(
                outbox_event.event_type, outbox_event.payload
            )
        except Exception as exc:  # noqa: BLE001
            outbox_event.mark_as_failed(str(exc))
            log.warning("outbox.publish_failed", error=str(exc))
            failed += 1
            continue
        outbox_event.mark_as_published()
        published += 1
    logger.info("outbox.batch_processed", published=published, failed=failed)
    return {"published": published, "failed": failed}
