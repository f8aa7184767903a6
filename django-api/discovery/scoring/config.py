"""Tunable scoring constants.

Defaults mirror the documented weight table. Deployments override individual
values through the ``DISCOVERY`` Django setting, e.g.::

    DISCOVERY = {
        "WEIGHTS": {"category_match": 45.0},
        "SECTION_SIZE": 8,
    }
"""

from dataclasses import dataclass, field, fields, replace
from datetime import UTC, timedelta, tzinfo
from typing import Any, Self
from zoneinfo import ZoneInfo

from discovery.domain.profile import COLD_START_THRESHOLD
from discovery.domain.scored import FeedSectionKind, Signal

DEFAULT_WEIGHTS: dict[Signal, float] = {
    Signal.CATEGORY_MATCH: 40.0,
    Signal.PURCHASE_AFFINITY: 35.0,
    Signal.LIKE_AFFINITY: 25.0,
    Signal.FOLLOWED_ORGANIZER: 30.0,
    Signal.HAPPENING_NOW: 25.0,
    Signal.SAME_CITY: 20.0,
    Signal.WITHIN_RADIUS: 15.0,
    Signal.UPCOMING_SOON: 15.0,
    Signal.POPULAR: 10.0,
    Signal.WEEKEND: 10.0,
    Signal.PRICE_MATCH: 8.0,
    Signal.HIGH_RATING: 5.0,
    Signal.FREE: 5.0,
    Signal.RECENTLY_ADDED: 5.0,
    Signal.OUTSIDE_RADIUS: -10.0,
}


@dataclass(frozen=True)
class ScoringConfig:
    weights: dict[Signal, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    # Interactions needed in a category before an affinity signal reaches full weight.
    affinity_saturation: int = 3
    popularity_threshold: float = 2.5
    high_rating_threshold: float = 4.0
    upcoming_window: timedelta = timedelta(days=7)
    recently_added_window: timedelta = timedelta(days=7)
    # Used when the profile has no max travel distance; bonus only.
    default_travel_radius_km: float = 20.0
    reason_visibility_threshold: float = 5.0
    max_reasons: int = 3
    cold_start_threshold: int = COLD_START_THRESHOLD
    cold_start_min_confidence: float = 0.1
    cold_start_per_category: int = 2
    recommended_size: int = 10
    section_size: int = 10
    section_sizes: dict[FeedSectionKind, int] = field(default_factory=dict)
    # Weekday and day labels are judged in this zone.
    time_zone: tzinfo = UTC

    def weight(self, signal: Signal) -> float:
        return self.weights.get(signal, DEFAULT_WEIGHTS[signal])

    def section_cap(self, kind: FeedSectionKind) -> int:
        if kind in self.section_sizes:
            return self.section_sizes[kind]
        if kind is FeedSectionKind.RECOMMENDED:
            return self.recommended_size
        return self.section_size

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> Self:
        """Build a config from a settings-style dict with upper-case keys."""
        config = cls()
        overrides: dict[str, Any] = {}
        names = {f.name for f in fields(cls)}
        for key, value in raw.items():
            name = key.lower()
            if name == "weights":
                weights = dict(config.weights)
                weights.update({Signal(k.lower()): float(v) for k, v in value.items()})
                overrides["weights"] = weights
            elif name == "section_sizes":
                overrides["section_sizes"] = {
                    FeedSectionKind(k.lower()): int(v) for k, v in value.items()
                }
            elif name in ("upcoming_window", "recently_added_window"):
                overrides[name] = value if isinstance(value, timedelta) else timedelta(days=value)
            elif name == "time_zone":
                overrides[name] = value if isinstance(value, tzinfo) else ZoneInfo(value)
            elif name in names:
                overrides[name] = value
            else:
                raise ValueError(f"Unknown DISCOVERY setting: {key}")
        return replace(config, **overrides)

    @classmethod
    def from_settings(cls) -> Self:
        from django.conf import settings

        raw = dict(getattr(settings, "DISCOVERY", {}))
        raw.setdefault("TIME_ZONE", settings.TIME_ZONE)
        return cls.from_mapping(raw)
