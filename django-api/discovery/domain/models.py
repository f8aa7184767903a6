"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in discovery/models.py (persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Self

from discovery.domain.errors import InvalidStatusTransitionError
from discovery.domain.value_objects import (
    Capacity,
    Coordinate,
    EventId,
    Money,
    OrganizerId,
    Rating,
)


class EventCategory(Enum):
    MUSIC = "Music"
    ARTS_CULTURE = "Arts & Culture"
    CONCERTS = "Concerts"
    SPORTS_WELLNESS = "Sports & Wellness"
    TECHNOLOGY = "Technology"
    FUNDRAISING = "Fundraising"
    COMEDY = "Comedy"
    POETRY = "Poetry"
    DRAMA = "Drama"
    EXHIBITIONS = "Exhibitions"
    NETWORKING = "Networking"
    EDUCATION = "Education"
    FOOD = "Food & Drinks"
    NIGHTLIFE = "Nightlife"
    FESTIVALS = "Festivals"
    OTHER = "Other"


class EventStatus(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: dict[EventStatus, frozenset[EventStatus]] = {
    EventStatus.DRAFT: frozenset({EventStatus.PUBLISHED, EventStatus.CANCELLED}),
    EventStatus.PUBLISHED: frozenset({EventStatus.ONGOING, EventStatus.CANCELLED}),
    EventStatus.ONGOING: frozenset({EventStatus.COMPLETED, EventStatus.CANCELLED}),
    EventStatus.COMPLETED: frozenset(),
    EventStatus.CANCELLED: frozenset(),
}


class PricePreference(Enum):
    """Price bands in UGX. ANY carries no range and never counts as a match."""

    FREE = "free"
    BUDGET = "budget"
    MODERATE = "moderate"
    PREMIUM = "premium"
    ANY = "any"

    @property
    def price_range(self) -> tuple[Decimal, Decimal | None] | None:
        return _PRICE_BANDS.get(self)

    def matches(self, price: Decimal) -> bool:
        bounds = self.price_range
        if bounds is None:
            return False
        low, high = bounds
        return price >= low and (high is None or price <= high)


_PRICE_BANDS: dict[PricePreference, tuple[Decimal, Decimal | None]] = {
    PricePreference.FREE: (Decimal("0"), Decimal("0")),
    PricePreference.BUDGET: (Decimal("0"), Decimal("50000")),
    PricePreference.MODERATE: (Decimal("50000"), Decimal("150000")),
    PricePreference.PREMIUM: (Decimal("150000"), None),
}


@dataclass(frozen=True)
class Venue:
    """Where an event takes place."""

    name: str
    address: str
    city: str
    coordinate: Coordinate


@dataclass(frozen=True)
class TicketType:
    """Domain representation of a TicketType."""

    name: str
    price: Money
    quantity: Capacity
    sold: Capacity = Capacity(0)

    @property
    def is_sold_out(self) -> bool:
        return self.sold.value >= self.quantity.value


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    Read-only input to the recommendation engine. Status changes and rating
    updates return new instances.
    """

    id: EventId
    title: str
    category: EventCategory
    starts_at: datetime
    ends_at: datetime
    venue: Venue
    organizer_id: OrganizerId
    created_at: datetime
    status: EventStatus = EventStatus.PUBLISHED
    rating: Rating = Rating()
    ticket_types: tuple[TicketType, ...] = ()
    description: str = ""
    organizer_name: str = ""
    like_count: int = 0

    def __post_init__(self) -> None:
        if self.starts_at >= self.ends_at:
            raise ValueError("Event must start before it ends")

    @property
    def min_price(self) -> Decimal:
        if not self.ticket_types:
            return Decimal("0")
        return min(t.price.amount for t in self.ticket_types)

    @property
    def price_range(self) -> tuple[Decimal, Decimal]:
        if not self.ticket_types:
            return Decimal("0"), Decimal("0")
        prices = [t.price.amount for t in self.ticket_types]
        return min(prices), max(prices)

    @property
    def is_free(self) -> bool:
        return self.min_price == 0

    @property
    def tickets_sold_ratio(self) -> float:
        total = sum(t.quantity.value for t in self.ticket_types)
        if total == 0:
            return 0.0
        return sum(t.sold.value for t in self.ticket_types) / total

    def is_happening_now(self, now: datetime) -> bool:
        return self.starts_at <= now <= self.ends_at

    def has_started(self, now: datetime) -> bool:
        return now >= self.starts_at

    def has_ended(self, now: datetime) -> bool:
        return self.status is EventStatus.COMPLETED or now > self.ends_at

    def is_ticket_sales_open(self, now: datetime) -> bool:
        """Sales close once the event starts or if it is not published."""
        return self.status is EventStatus.PUBLISHED and now < self.starts_at

    def time_until_sales_close(self, now: datetime) -> timedelta | None:
        if not self.is_ticket_sales_open(now):
            return None
        return self.starts_at - now

    def transition_to(self, status: EventStatus) -> Self:
        """Return a copy in the new status.

        Raises:
            InvalidStatusTransitionError: If the lifecycle would move backwards.
        """
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransitionError(self.status.value, status.value)
        return replace(self, status=status)

    def with_rating(self, score: float) -> Self:
        return replace(self, rating=self.rating.with_score(score))
