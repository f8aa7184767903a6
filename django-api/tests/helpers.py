"""Shared constants and builders for the test suite."""

from datetime import UTC, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from discovery.domain import Capacity, Coordinate, Money, TicketType

# A Wednesday.
NOW = datetime(2026, 3, 4, 12, 0, tzinfo=UTC)
SATURDAY = datetime(2026, 3, 7, 12, 0, tzinfo=UTC)
KAMPALA = Coordinate(0.3136, 32.5811)
ENTEBBE = Coordinate(0.0512, 32.4637)
KAMPALA_TZ = ZoneInfo("Africa/Kampala")


def ticket(price: str = "20000", quantity: int = 100, sold: int = 10) -> TicketType:
    return TicketType(
        name="General",
        price=Money(Decimal(price)),
        quantity=Capacity(quantity),
        sold=Capacity(sold),
    )
