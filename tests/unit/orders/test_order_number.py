"""Unit tests for ``Order.generate_order_number``."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from freezegun import freeze_time

from modules.orders.models import Order

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _tokyo(settings):
    settings.TIME_ZONE = "Asia/Tokyo"


class TestGenerateOrderNumber:
    def test_format_from_explicit_clock(self):
        now = datetime(2024, 1, 15, 3, 0, 0, tzinfo=timezone.utc)
        assert Order.generate_order_number(now) == "ORD240115600000"

    def test_date_part_uses_local_time_zone(self):
        # 20:00 UTC on the 14th is already the 15th in Tokyo
        now = datetime(2024, 1, 14, 20, 0, 0, 123000, tzinfo=timezone.utc)
        assert Order.generate_order_number(now) == "ORD240115400123"

    @freeze_time("2024-01-15 03:00:00")
    def test_defaults_to_current_time(self):
        assert Order.generate_order_number() == "ORD240115600000"

    def test_length_and_prefix(self):
        number = Order.generate_order_number()
        assert number.startswith("ORD")
        assert len(number) == 15
        assert number[3:].isdigit()
