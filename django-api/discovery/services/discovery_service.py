"""Discovery service - all business logic lives here.

Services:
- Depend only on interfaces (stores) and the scoring engine
- Validate identifiers and map them to domain errors
- Treat a missing profile as a brand-new user
- Return domain models or domain errors
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from discovery.domain import (
    Coordinate,
    EventCategory,
    EventId,
    FeedSection,
    InteractionType,
    InterestProfile,
    OrganizerId,
    PricePreference,
    ScoredEvent,
    UserId,
)
from discovery.domain.errors import (
    EventNotFoundError,
    InvalidEventIdError,
    InvalidInputError,
    InvalidUserIdError,
    ProfileNotFoundError,
)
from discovery.scoring import DiscoveryFeedBuilder, RecommendationEngine
from discovery.stores.interfaces import EventStore, ProfileStore

logger = logging.getLogger(__name__)

_UNSET = object()


def parse_user_id(value: str) -> UserId:
    try:
        return UserId.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidUserIdError() from None


def parse_event_id(value: str) -> EventId:
    try:
        return EventId.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidEventIdError() from None


def parse_organizer_id(value: str) -> OrganizerId:
    try:
        return OrganizerId.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidInputError("organizer id is not a valid UUID") from None


class DiscoveryService:
    """Service for recommendations, feeds and interest profiles."""

    def __init__(
        self,
        event_store: EventStore,
        profile_store: ProfileStore,
        engine: RecommendationEngine | None = None,
        feed_builder: DiscoveryFeedBuilder | None = None,
    ) -> None:
        self._events = event_store
        self._profiles = profile_store
        self._engine = engine or RecommendationEngine()
        self._feed = feed_builder or DiscoveryFeedBuilder(self._engine.config)

    def get_profile(self, user_id: str) -> InterestProfile:
        """Return the user's profile, or an empty one for an unknown user.

        Raises:
            InvalidUserIdError: If the user_id is not a valid UUID.
        """
        return self._load_profile(parse_user_id(user_id))

    def get_recommendations(
        self,
        user_id: str,
        now: datetime,
        location: Coordinate | None = None,
        limit: int | None = None,
    ) -> list[ScoredEvent]:
        """Return ranked events for the user.

        Raises:
            InvalidUserIdError: If the user_id is not a valid UUID.
        """
        profile = self._load_profile(parse_user_id(user_id))
        scored = self._engine.score(self._events.list_candidate_events(), profile, now, location)
        if limit is not None:
            scored = scored[:limit]
        return scored

    def get_feed(
        self,
        user_id: str,
        now: datetime,
        location: Coordinate | None = None,
    ) -> list[FeedSection]:
        """Return the discovery feed sections for the user.

        Raises:
            InvalidUserIdError: If the user_id is not a valid UUID.
        """
        scored = self.get_recommendations(user_id, now, location)
        return self._feed.build_sections(scored, now)

    def record_interaction(
        self,
        user_id: str,
        event_id: str,
        interaction_type: InteractionType,
        category: EventCategory | None = None,
    ) -> None:
        """Count one interaction against the user's profile.

        Without an explicit category the event's own category is used.

        Raises:
            InvalidUserIdError: If the user_id is not a valid UUID.
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the category must be looked up and the event does not exist.
        """
        uid = parse_user_id(user_id)
        eid = parse_event_id(event_id)
        if category is None:
            event = self._events.get_event(eid)
            if event is None:
                raise EventNotFoundError(event_id)
            category = event.category
        self._profiles.record_interaction(uid, category, interaction_type)
        logger.info(
            "Recorded %s interaction for user %s on event %s (%s)",
            interaction_type.value,
            uid,
            eid,
            category.value,
        )

    def update_preferences(
        self,
        user_id: str,
        preferred_categories: Iterable[EventCategory] | None = None,
        price_preference=_UNSET,
        preferred_city=_UNSET,
        max_travel_distance_km=_UNSET,
    ) -> InterestProfile:
        """Replace the given explicit preferences; omitted ones are left as stored.

        Raises:
            InvalidUserIdError: If the user_id is not a valid UUID.
            InvalidInputError: If the travel distance is negative.
        """
        uid = parse_user_id(user_id)
        profile = self._load_profile(uid)
        if preferred_categories is not None:
            profile.preferred_categories = set(preferred_categories)
        if price_preference is not _UNSET:
            profile.price_preference = (
                PricePreference(price_preference) if price_preference is not None else None
            )
        if preferred_city is not _UNSET:
            profile.preferred_city = preferred_city or None
        if max_travel_distance_km is not _UNSET:
            if max_travel_distance_km is not None and max_travel_distance_km < 0:
                raise InvalidInputError("max travel distance cannot be negative")
            profile.max_travel_distance_km = max_travel_distance_km
        self._profiles.save_preferences(uid, profile)
        return profile

    def follow_organizer(self, user_id: str, organizer_id: str) -> None:
        uid = parse_user_id(user_id)
        profile = self._load_profile(uid)
        profile.follow_organizer(parse_organizer_id(organizer_id))
        self._profiles.save_preferences(uid, profile)

    def unfollow_organizer(self, user_id: str, organizer_id: str) -> None:
        uid = parse_user_id(user_id)
        profile = self._load_profile(uid)
        profile.unfollow_organizer(parse_organizer_id(organizer_id))
        self._profiles.save_preferences(uid, profile)

    def reset_profile(self, user_id: str) -> None:
        uid = parse_user_id(user_id)
        self._profiles.reset_profile(uid)
        logger.info("Reset interaction history for user %s", uid)

    def _load_profile(self, user_id: UserId) -> InterestProfile:
        try:
            profile = self._profiles.get_profile(user_id)
        except ProfileNotFoundError:
            logger.info("No profile for user %s, using cold start", user_id)
            profile = InterestProfile()
        profile.cold_start_threshold = self._engine.config.cold_start_threshold
        return profile
