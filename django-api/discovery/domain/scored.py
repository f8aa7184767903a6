"""Outputs of a scoring pass. Created per call, never persisted."""

from dataclasses import dataclass
from enum import Enum

from discovery.domain.models import Event


class Signal(Enum):
    CATEGORY_MATCH = "category_match"
    PURCHASE_AFFINITY = "purchase_affinity"
    LIKE_AFFINITY = "like_affinity"
    FOLLOWED_ORGANIZER = "followed_organizer"
    HAPPENING_NOW = "happening_now"
    SAME_CITY = "same_city"
    WITHIN_RADIUS = "within_radius"
    UPCOMING_SOON = "upcoming_soon"
    POPULAR = "popular"
    WEEKEND = "weekend"
    PRICE_MATCH = "price_match"
    HIGH_RATING = "high_rating"
    FREE = "free"
    RECENTLY_ADDED = "recently_added"
    OUTSIDE_RADIUS = "outside_radius"


INTEREST_SIGNALS = frozenset(
    {Signal.CATEGORY_MATCH, Signal.PURCHASE_AFFINITY, Signal.LIKE_AFFINITY}
)


@dataclass(frozen=True)
class SignalContribution:
    signal: Signal
    points: float
    reason: str


@dataclass(frozen=True)
class ScoredEvent:
    """An event with its score and the signals that explain it."""

    event: Event
    score: float
    reasons: tuple[str, ...] = ()
    contributions: tuple[SignalContribution, ...] = ()

    def has_signal(self, signal: Signal) -> bool:
        return any(c.signal is signal for c in self.contributions)

    @property
    def primary_reason(self) -> str:
        return self.reasons[0] if self.reasons else "Popular event"


class FeedSectionKind(Enum):
    HAPPENING_NOW = "happening_now"
    RECOMMENDED = "recommended"
    BASED_ON_INTERESTS = "based_on_interests"
    NEAR_YOU = "near_you"
    POPULAR_NOW = "popular_now"
    THIS_WEEKEND = "this_weekend"
    FREE_EVENTS = "free_events"

    @property
    def title(self) -> str:
        return SECTION_TITLES[self]


SECTION_TITLES: dict[FeedSectionKind, str] = {
    FeedSectionKind.HAPPENING_NOW: "Happening Now",
    FeedSectionKind.RECOMMENDED: "Recommended for You",
    FeedSectionKind.BASED_ON_INTERESTS: "Based on Your Interests",
    FeedSectionKind.NEAR_YOU: "Near You",
    FeedSectionKind.POPULAR_NOW: "Popular Right Now",
    FeedSectionKind.THIS_WEEKEND: "This Weekend",
    FeedSectionKind.FREE_EVENTS: "Free Events",
}


@dataclass(frozen=True)
class FeedSection:
    kind: FeedSectionKind
    events: tuple[ScoredEvent, ...]

    @property
    def title(self) -> str:
        return self.kind.title
