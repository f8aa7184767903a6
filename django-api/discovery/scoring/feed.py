"""Groups a ranked list of scored events into discovery feed sections."""

from collections.abc import Callable, Sequence
from datetime import datetime

from discovery.domain.scored import (
    INTEREST_SIGNALS,
    FeedSection,
    FeedSectionKind,
    ScoredEvent,
    Signal,
)
from discovery.scoring.config import ScoringConfig

Predicate = Callable[[ScoredEvent, datetime], bool]


def _has_interest_signal(item: ScoredEvent) -> bool:
    return any(item.has_signal(signal) for signal in INTEREST_SIGNALS)


# Priority order. An event lands in the first section whose predicate it meets.
SECTION_PREDICATES: tuple[tuple[FeedSectionKind, Predicate], ...] = (
    (FeedSectionKind.HAPPENING_NOW, lambda item, now: item.event.is_happening_now(now)),
    # Interest-matched events are kept for the next section.
    (FeedSectionKind.RECOMMENDED, lambda item, now: not _has_interest_signal(item)),
    (FeedSectionKind.BASED_ON_INTERESTS, lambda item, now: _has_interest_signal(item)),
    (FeedSectionKind.NEAR_YOU, lambda item, now: item.has_signal(Signal.WITHIN_RADIUS)),
    (FeedSectionKind.POPULAR_NOW, lambda item, now: item.has_signal(Signal.POPULAR)),
    (FeedSectionKind.THIS_WEEKEND, lambda item, now: item.has_signal(Signal.WEEKEND)),
    (FeedSectionKind.FREE_EVENTS, lambda item, now: item.has_signal(Signal.FREE)),
)


class DiscoveryFeedBuilder:
    """Builds capped, non-overlapping feed sections from engine output."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig()

    def build_sections(self, scored: Sequence[ScoredEvent], now: datetime) -> list[FeedSection]:
        """Partition ``scored`` (already ranked) into sections.

        Each event appears at most once across all sections; empty sections
        are omitted.
        """
        placed: set[str] = set()
        sections: list[FeedSection] = []
        for kind, predicate in SECTION_PREDICATES:
            cap = self._config.section_cap(kind)
            members: list[ScoredEvent] = []
            for item in scored:
                if len(members) >= cap:
                    break
                key = str(item.event.id)
                if key in placed or not predicate(item, now):
                    continue
                members.append(item)
                placed.add(key)
            if members:
                sections.append(FeedSection(kind=kind, events=tuple(members)))
        return sections
