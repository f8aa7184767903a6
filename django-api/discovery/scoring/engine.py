"""Event relevance scoring.

Each signal is a pure function of (event, scoring context) returning a
contribution or None. A score is the sum of the contributions that apply, so
the result for a given (events, profile, now, location) is fully reproducible.
The engine never reads the clock; callers supply ``now``.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from discovery.domain.errors import InvalidInputError
from discovery.domain.models import Event, EventCategory, EventStatus
from discovery.domain.profile import INTERACTION_POINTS, InteractionType, InterestProfile
from discovery.domain.scored import INTEREST_SIGNALS, ScoredEvent, Signal, SignalContribution
from discovery.domain.value_objects import Coordinate
from discovery.scoring.config import ScoringConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringContext:
    profile: InterestProfile
    now: datetime
    location: Coordinate | None
    config: ScoringConfig

    def contribution(self, signal: Signal, reason: str, scale: float = 1.0) -> SignalContribution:
        return SignalContribution(signal, self.config.weight(signal) * scale, reason)


SignalFn = Callable[[Event, ScoringContext], SignalContribution | None]


def category_match(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    if event.category in ctx.profile.preferred_categories:
        return ctx.contribution(Signal.CATEGORY_MATCH, f"Matches your {event.category.value} interests")
    return None


def _affinity(kind: InteractionType, signal: Signal, reason: str) -> SignalFn:
    def affinity(event: Event, ctx: ScoringContext) -> SignalContribution | None:
        count = ctx.profile.interaction_count(kind, event.category)
        if count <= 0:
            return None
        # Weight derived from this interaction type only, normalised against the saturation point.
        derived = INTERACTION_POINTS[kind] * count
        full = INTERACTION_POINTS[kind] * ctx.config.affinity_saturation
        return ctx.contribution(signal, reason, scale=min(1.0, derived / full))

    affinity.__name__ = f"{kind.value}_affinity"
    return affinity


purchase_affinity = _affinity(
    InteractionType.PURCHASE, Signal.PURCHASE_AFFINITY, "Similar to events you've attended"
)
like_affinity = _affinity(InteractionType.LIKE, Signal.LIKE_AFFINITY, "Based on events you liked")


def followed_organizer(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    if event.organizer_id not in ctx.profile.followed_organizer_ids:
        return None
    if event.organizer_name:
        reason = f"From {event.organizer_name}, an organizer you follow"
    else:
        reason = "From an organizer you follow"
    return ctx.contribution(Signal.FOLLOWED_ORGANIZER, reason)


def happening_now(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    if event.is_happening_now(ctx.now):
        return ctx.contribution(Signal.HAPPENING_NOW, "Happening right now")
    return None


def same_city(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    city = ctx.profile.preferred_city
    if city and event.venue.city.strip().casefold() == city.strip().casefold():
        return ctx.contribution(Signal.SAME_CITY, f"In {event.venue.city}")
    return None


def travel_distance(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    """Within-radius bonus or outside-radius penalty. Skipped without a location."""
    if ctx.location is None:
        return None
    distance = ctx.location.distance_to(event.venue.coordinate)
    radius = ctx.profile.max_travel_distance_km
    if radius is None:
        if distance <= ctx.config.default_travel_radius_km:
            return ctx.contribution(Signal.WITHIN_RADIUS, f"Only {int(distance)} km away")
        return None
    if distance <= radius:
        return ctx.contribution(Signal.WITHIN_RADIUS, f"Only {int(distance)} km away")
    return ctx.contribution(Signal.OUTSIDE_RADIUS, "Outside your travel distance")


def upcoming_soon(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    until = event.starts_at - ctx.now
    if not timedelta(0) < until <= ctx.config.upcoming_window:
        return None
    return ctx.contribution(
        Signal.UPCOMING_SOON, _days_until_label(event.starts_at, ctx.now, ctx.config.time_zone)
    )


def _days_until_label(starts_at: datetime, now: datetime, zone: tzinfo) -> str:
    days = (starts_at.astimezone(zone).date() - now.astimezone(zone).date()).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    return f"In {days} days"


def popularity(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    ratio = event.tickets_sold_ratio
    if event.rating.mean * ratio > ctx.config.popularity_threshold:
        return ctx.contribution(Signal.POPULAR, f"Popular event ({int(ratio * 100)}% sold)")
    return None


def weekend(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    if event.starts_at.astimezone(ctx.config.time_zone).weekday() >= 5:
        return ctx.contribution(Signal.WEEKEND, "On the weekend")
    return None


def price_match(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    preference = ctx.profile.price_preference
    if preference is not None and preference.matches(event.min_price):
        return ctx.contribution(Signal.PRICE_MATCH, "Matches your price preference")
    return None


def high_rating(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    if event.rating.mean >= ctx.config.high_rating_threshold:
        return ctx.contribution(Signal.HIGH_RATING, f"Highly rated ({event.rating.mean:.1f})")
    return None


def free_event(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    if event.is_free:
        return ctx.contribution(Signal.FREE, "Free event")
    return None


def recently_added(event: Event, ctx: ScoringContext) -> SignalContribution | None:
    age = ctx.now - event.created_at
    if timedelta(0) <= age <= ctx.config.recently_added_window:
        return ctx.contribution(Signal.RECENTLY_ADDED, "Recently added")
    return None


# Evaluation order; also the tie order for reasons with equal points.
SIGNALS: tuple[tuple[Signal, SignalFn], ...] = (
    (Signal.CATEGORY_MATCH, category_match),
    (Signal.PURCHASE_AFFINITY, purchase_affinity),
    (Signal.LIKE_AFFINITY, like_affinity),
    (Signal.FOLLOWED_ORGANIZER, followed_organizer),
    (Signal.HAPPENING_NOW, happening_now),
    (Signal.SAME_CITY, same_city),
    (Signal.WITHIN_RADIUS, travel_distance),
    (Signal.UPCOMING_SOON, upcoming_soon),
    (Signal.POPULAR, popularity),
    (Signal.WEEKEND, weekend),
    (Signal.PRICE_MATCH, price_match),
    (Signal.HIGH_RATING, high_rating),
    (Signal.FREE, free_event),
    (Signal.RECENTLY_ADDED, recently_added),
)


def validate_event(event: Event) -> None:
    """Raise InvalidInputError for events the engine cannot score."""
    if not isinstance(event.category, EventCategory):
        raise InvalidInputError(f"event {event.id} has no valid category")
    if event.venue is None:
        raise InvalidInputError(f"event {event.id} has no venue")


class RecommendationEngine:
    """Scores and ranks candidate events for one profile."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig()

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def is_cold_start(self, profile: InterestProfile) -> bool:
        """Explicit categories count as signal, so a profile naming any is never cold."""
        if profile.preferred_categories:
            return False
        return profile.is_new_user() or profile.confidence_score() < self._config.cold_start_min_confidence

    def score(
        self,
        events: Iterable[Event],
        profile: InterestProfile,
        now: datetime,
        user_location: Coordinate | None = None,
    ) -> list[ScoredEvent]:
        """Return the candidates as a ranked list of scored events.

        Cancelled, ended and malformed events are left out. Ranking is by
        descending score, then soonest start, then event id. For a cold-start
        profile the interest signals are suppressed and the head of the list is
        diversified across categories.
        """
        ctx = ScoringContext(profile=profile, now=now, location=user_location, config=self._config)
        cold = self.is_cold_start(profile)
        scored: list[ScoredEvent] = []
        skipped = 0
        for event in events:
            try:
                validate_event(event)
            except InvalidInputError as err:
                logger.warning("Skipping event during scoring: %s", err.detail)
                skipped += 1
                continue
            if event.status is EventStatus.CANCELLED or event.has_ended(now):
                continue
            scored.append(self.score_event(event, ctx, cold_start=cold))

        scored.sort(key=lambda s: (-s.score, s.event.starts_at, str(s.event.id)))
        if cold:
            scored = diversify(
                scored,
                limit=self._config.recommended_size,
                per_category=self._config.cold_start_per_category,
            )
        logger.debug(
            "Scored %d events (skipped %d, cold_start=%s)", len(scored), skipped, cold
        )
        return scored

    def score_event(self, event: Event, ctx: ScoringContext, cold_start: bool = False) -> ScoredEvent:
        contributions = []
        for signal, fn in SIGNALS:
            if cold_start and signal in INTEREST_SIGNALS:
                continue
            contribution = fn(event, ctx)
            if contribution is not None:
                contributions.append(contribution)
        total = sum(c.points for c in contributions)
        return ScoredEvent(
            event=event,
            score=total,
            reasons=self._reasons(contributions),
            contributions=tuple(contributions),
        )

    def _reasons(self, contributions: Sequence[SignalContribution]) -> tuple[str, ...]:
        visible = [c for c in contributions if c.points > self._config.reason_visibility_threshold]
        visible.sort(key=lambda c: -c.points)
        return tuple(c.reason for c in visible[: self._config.max_reasons])


def diversify(ranked: list[ScoredEvent], limit: int, per_category: int) -> list[ScoredEvent]:
    """Fill the first ``limit`` slots with at most ``per_category`` events per category.

    Events that do not fit keep their relative order after the head. Events
    happening now stay in place without taking a slot.
    """
    head: list[ScoredEvent] = []
    deferred: list[ScoredEvent] = []
    taken: dict[EventCategory, int] = {}
    filled = 0
    for item in ranked:
        category = item.event.category
        if item.has_signal(Signal.HAPPENING_NOW):
            head.append(item)
        elif filled < limit and taken.get(category, 0) < per_category:
            head.append(item)
            taken[category] = taken.get(category, 0) + 1
            filled += 1
        else:
            deferred.append(item)
    return head + deferred
