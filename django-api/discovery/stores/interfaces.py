"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from discovery.domain import (
    Event,
    EventCategory,
    EventId,
    InteractionType,
    InterestProfile,
    UserId,
)


class EventStore(ABC):
    """Interface for the event catalog."""

    @abstractmethod
    def list_candidate_events(self) -> list[Event]:
        """Return published and ongoing events, ordered by starts_at ascending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...


class ProfileStore(ABC):
    """Interface for interest profile persistence.

    Interaction recording must be atomic per call: concurrent calls for the
    same user never lose an update. Reads may return a slightly stale snapshot.
    """

    @abstractmethod
    def get_profile(self, user_id: UserId) -> InterestProfile:
        """Return a snapshot of the user's profile.

        Raises:
            ProfileNotFoundError: If the user has no stored profile.
        """
        ...

    @abstractmethod
    def save_preferences(self, user_id: UserId, profile: InterestProfile) -> None:
        """Persist the explicit preferences and follows of ``profile``, creating it if needed."""
        ...

    @abstractmethod
    def record_interaction(
        self, user_id: UserId, category: EventCategory, kind: InteractionType
    ) -> None:
        """Atomically count one interaction, creating the profile if needed."""
        ...

    @abstractmethod
    def reset_profile(self, user_id: UserId) -> None:
        """Zero the user's interaction counters. Explicit preferences are kept."""
        ...
