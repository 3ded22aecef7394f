from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.payments"
    label = "payments"

    def ready(self) -> None:
        from modules.payments.events import PaymentRefunded, PaymentStatusChanged
        from modules.payments.handlers import (
            payment_refunded_handler,
            payment_status_changed_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(PaymentStatusChanged, payment_status_changed_handler)
        event_bus.subscribe(PaymentRefunded, payment_refunded_handler)
