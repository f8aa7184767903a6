from discovery.domain.models import (
    Event,
    EventCategory,
    EventStatus,
    PricePreference,
    TicketType,
    Venue,
)
from discovery.domain.profile import InteractionType, InterestProfile
from discovery.domain.scored import (
    FeedSection,
    FeedSectionKind,
    ScoredEvent,
    Signal,
    SignalContribution,
)
from discovery.domain.value_objects import (
    Capacity,
    Coordinate,
    EventId,
    Money,
    OrganizerId,
    Rating,
    UserId,
)

__all__ = [
    "Event",
    "EventCategory",
    "EventStatus",
    "PricePreference",
    "TicketType",
    "Venue",
    "InteractionType",
    "InterestProfile",
    "FeedSection",
    "FeedSectionKind",
    "ScoredEvent",
    "Signal",
    "SignalContribution",
    "EventId",
    "OrganizerId",
    "UserId",
    "Money",
    "Capacity",
    "Coordinate",
    "Rating",
]
