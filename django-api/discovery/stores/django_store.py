"""Django ORM implementations of the discovery stores."""

import logging
from decimal import Decimal

from django.conf import settings
from django.core.cache import cache
from django.db import transaction
from django.db.models import F

from discovery import models
from discovery.domain import (
    Capacity,
    Coordinate,
    Event,
    EventCategory,
    EventId,
    EventStatus,
    InteractionType,
    InterestProfile,
    Money,
    OrganizerId,
    PricePreference,
    Rating,
    TicketType,
    UserId,
    Venue,
)
from discovery.domain.errors import ProfileNotFoundError
from discovery.stores.interfaces import EventStore, ProfileStore

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = "discovery:catalog"
CANDIDATE_STATUSES = (EventStatus.PUBLISHED.value, EventStatus.ONGOING.value)


def event_to_domain(row: models.Event) -> Event:
    """Convert an ORM row. Raises ValueError if the row breaks a domain invariant."""
    return Event(
        id=EventId(row.id),
        title=row.title,
        description=row.description,
        category=EventCategory(row.category),
        starts_at=row.starts_at,
        ends_at=row.ends_at,
        venue=Venue(
            name=row.venue_name,
            address=row.venue_address,
            city=row.venue_city,
            coordinate=Coordinate(row.latitude, row.longitude),
        ),
        organizer_id=OrganizerId(row.organizer_id),
        organizer_name=row.organizer_name,
        created_at=row.created_at,
        status=EventStatus(row.status),
        rating=Rating(mean=row.rating_mean, count=row.rating_count),
        ticket_types=tuple(
            TicketType(
                name=t.name,
                price=Money(Decimal(t.price)),
                quantity=Capacity(t.quantity),
                sold=Capacity(t.sold),
            )
            for t in row.ticket_types.all()
        ),
        like_count=row.like_count,
    )


class DjangoEventStore(EventStore):
    """Database-backed event catalog. Candidate lists are cached until a catalog write."""

    def list_candidate_events(self) -> list[Event]:
        return cache.get_or_set(
            CATALOG_CACHE_KEY,
            self._load_candidates,
            timeout=getattr(settings, "CATALOG_CACHE_TIMEOUT", 60),
        )

    def _load_candidates(self) -> list[Event]:
        rows = (
            models.Event.objects.filter(status__in=CANDIDATE_STATUSES)
            .prefetch_related("ticket_types")
            .order_by("starts_at", "id")
        )
        events = []
        for row in rows:
            try:
                events.append(event_to_domain(row))
            except ValueError as err:
                logger.warning("Skipping malformed event %s: %s", row.id, err)
        logger.debug("Loaded %d candidate events", len(events))
        return events

    def get_event(self, event_id: EventId) -> Event | None:
        row = (
            models.Event.objects.prefetch_related("ticket_types")
            .filter(id=event_id.value)
            .first()
        )
        if row is None:
            return None
        try:
            return event_to_domain(row)
        except ValueError as err:
            logger.warning("Skipping malformed event %s: %s", row.id, err)
            return None


class DjangoProfileStore(ProfileStore):
    """Database-backed interest profiles with atomic interaction counters."""

    def get_profile(self, user_id: UserId) -> InterestProfile:
        row = (
            models.InterestProfile.objects.prefetch_related("interactions")
            .filter(user_id=user_id.value)
            .first()
        )
        if row is None:
            raise ProfileNotFoundError(str(user_id))
        return InterestProfile.from_counts(
            (
                (EventCategory(i.category), InteractionType(i.interaction_type), i.count)
                for i in row.interactions.all()
            ),
            preferred_categories={EventCategory(c) for c in row.preferred_categories},
            price_preference=(
                PricePreference(row.price_preference) if row.price_preference else None
            ),
            preferred_city=row.preferred_city or None,
            max_travel_distance_km=row.max_travel_distance_km,
            followed_organizer_ids={
                OrganizerId.from_string(o) for o in row.followed_organizer_ids
            },
        )

    def save_preferences(self, user_id: UserId, profile: InterestProfile) -> None:
        models.InterestProfile.objects.update_or_create(
            user_id=user_id.value,
            defaults={
                "preferred_categories": sorted(c.value for c in profile.preferred_categories),
                "price_preference": (
                    profile.price_preference.value if profile.price_preference else ""
                ),
                "preferred_city": profile.preferred_city or "",
                "max_travel_distance_km": profile.max_travel_distance_km,
                "followed_organizer_ids": sorted(str(o) for o in profile.followed_organizer_ids),
            },
        )

    def record_interaction(
        self, user_id: UserId, category: EventCategory, kind: InteractionType
    ) -> None:
        with transaction.atomic():
            row, _ = models.InterestProfile.objects.get_or_create(user_id=user_id.value)
            counter, _ = models.CategoryInteraction.objects.get_or_create(
                profile=row,
                category=category.value,
                interaction_type=kind.value,
            )
            models.CategoryInteraction.objects.filter(pk=counter.pk).update(
                count=F("count") + 1
            )

    def reset_profile(self, user_id: UserId) -> None:
        models.CategoryInteraction.objects.filter(profile__user_id=user_id.value).update(count=0)
