"""In-process store implementations for tests and local wiring."""

import copy
import threading
from collections.abc import Iterable

from discovery.domain import (
    Event,
    EventCategory,
    EventId,
    EventStatus,
    InteractionType,
    InterestProfile,
    UserId,
)
from discovery.domain.errors import ProfileNotFoundError
from discovery.stores.interfaces import EventStore, ProfileStore


class InMemoryEventStore(EventStore):
    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events: dict[EventId, Event] = {e.id: e for e in events}

    def add(self, event: Event) -> None:
        self._events[event.id] = event

    def list_candidate_events(self) -> list[Event]:
        candidates = [
            e
            for e in self._events.values()
            if e.status in (EventStatus.PUBLISHED, EventStatus.ONGOING)
        ]
        return sorted(candidates, key=lambda e: (e.starts_at, str(e.id)))

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)


class InMemoryProfileStore(ProfileStore):
    """Profiles held in a dict. A single lock serialises writers."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, InterestProfile] = {}
        self._lock = threading.Lock()

    def get_profile(self, user_id: UserId) -> InterestProfile:
        with self._lock:
            profile = self._profiles.get(user_id)
            if profile is None:
                raise ProfileNotFoundError(str(user_id))
            return copy.deepcopy(profile)

    def save_preferences(self, user_id: UserId, profile: InterestProfile) -> None:
        with self._lock:
            stored = self._profiles.setdefault(user_id, InterestProfile())
            stored.preferred_categories = set(profile.preferred_categories)
            stored.price_preference = profile.price_preference
            stored.preferred_city = profile.preferred_city
            stored.max_travel_distance_km = profile.max_travel_distance_km
            stored.followed_organizer_ids = set(profile.followed_organizer_ids)

    def record_interaction(
        self, user_id: UserId, category: EventCategory, kind: InteractionType
    ) -> None:
        with self._lock:
            self._profiles.setdefault(user_id, InterestProfile()).record_interaction(category, kind)

    def reset_profile(self, user_id: UserId) -> None:
        with self._lock:
            profile = self._profiles.get(user_id)
            if profile is not None:
                profile.reset()
