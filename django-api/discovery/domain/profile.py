"""Per-user interest profile.

The profile accumulates preference signal from explicit choices (categories,
price band, city, travel distance, followed organizers) and from interactions.
Inferred category weights are a pure function of the interaction counters, so
a stored profile only needs to persist the counters.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Self

from discovery.domain.models import EventCategory, PricePreference
from discovery.domain.value_objects import OrganizerId

COLD_START_THRESHOLD = 20


class InteractionType(Enum):
    VIEW = "view"
    LIKE = "like"
    SHARE = "share"
    PURCHASE = "purchase"


INTERACTION_POINTS: dict[InteractionType, float] = {
    InteractionType.PURCHASE: 5.0,
    InteractionType.LIKE: 3.0,
    InteractionType.SHARE: 2.0,
    InteractionType.VIEW: 1.0,
}


def _empty_counters() -> dict[InteractionType, dict[EventCategory, int]]:
    return {kind: {} for kind in InteractionType}


@dataclass
class InterestProfile:
    """Accumulated preference signal for one user."""

    preferred_categories: set[EventCategory] = field(default_factory=set)
    price_preference: PricePreference | None = None
    preferred_city: str | None = None
    max_travel_distance_km: float | None = None
    followed_organizer_ids: set[OrganizerId] = field(default_factory=set)
    inferred_weights: dict[EventCategory, float] = field(default_factory=dict)
    interaction_counts: dict[InteractionType, dict[EventCategory, int]] = field(
        default_factory=_empty_counters
    )
    cold_start_threshold: int = COLD_START_THRESHOLD

    def __post_init__(self) -> None:
        if self.cold_start_threshold <= 0:
            raise ValueError("Cold start threshold must be positive")
        if self.max_travel_distance_km is not None and self.max_travel_distance_km < 0:
            raise ValueError("Max travel distance cannot be negative")
        for kind in InteractionType:
            self.interaction_counts.setdefault(kind, {})

    @classmethod
    def from_counts(
        cls,
        counts: Iterable[tuple[EventCategory, InteractionType, int]],
        **preferences,
    ) -> Self:
        """Rebuild a profile from persisted (category, type, count) rows."""
        profile = cls(**preferences)
        for category, kind, count in counts:
            if count < 0:
                raise ValueError("Interaction count cannot be negative")
            if count == 0:
                continue
            per_kind = profile.interaction_counts[kind]
            per_kind[category] = per_kind.get(category, 0) + count
            profile.inferred_weights[category] = (
                profile.inferred_weights.get(category, 0.0) + INTERACTION_POINTS[kind] * count
            )
        return profile

    def record_interaction(self, category: EventCategory, kind: InteractionType) -> None:
        """Accumulate one interaction. Repeated calls add up."""
        per_kind = self.interaction_counts[kind]
        per_kind[category] = per_kind.get(category, 0) + 1
        self.inferred_weights[category] = (
            self.inferred_weights.get(category, 0.0) + INTERACTION_POINTS[kind]
        )

    def interaction_count(self, kind: InteractionType, category: EventCategory) -> int:
        return self.interaction_counts[kind].get(category, 0)

    @property
    def total_interactions(self) -> int:
        return sum(sum(per_kind.values()) for per_kind in self.interaction_counts.values())

    def confidence_score(self) -> float:
        return min(1.0, self.total_interactions / self.cold_start_threshold)

    def is_new_user(self) -> bool:
        return self.total_interactions == 0

    def top_categories(self, limit: int = 5) -> list[EventCategory]:
        """Categories ordered by inferred weight, heaviest first."""
        order = {category: index for index, category in enumerate(EventCategory)}
        ranked = sorted(
            (c for c, w in self.inferred_weights.items() if w > 0),
            key=lambda c: (-self.inferred_weights[c], order[c]),
        )
        return ranked[:limit]

    def follow_organizer(self, organizer_id: OrganizerId) -> None:
        self.followed_organizer_ids.add(organizer_id)

    def unfollow_organizer(self, organizer_id: OrganizerId) -> None:
        self.followed_organizer_ids.discard(organizer_id)

    def reset(self) -> None:
        """Forget interaction history. Explicit preferences are kept."""
        self.inferred_weights.clear()
        self.interaction_counts = _empty_counters()

    def counters(self) -> Mapping[tuple[EventCategory, InteractionType], int]:
        """Flattened non-zero counters, as a profile store persists them."""
        return {
            (category, kind): count
            for kind, per_kind in self.interaction_counts.items()
            for category, count in per_kind.items()
            if count
        }
