"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in discovery/domain/.
"""

import uuid

from django.db import models

from discovery.domain.models import EventCategory, EventStatus, PricePreference
from discovery.domain.profile import InteractionType

CATEGORY_CHOICES = [(c.value, c.value) for c in EventCategory]
STATUS_CHOICES = [(s.value, s.value.title()) for s in EventStatus]
PRICE_PREFERENCE_CHOICES = [(p.value, p.value.title()) for p in PricePreference]
INTERACTION_CHOICES = [(i.value, i.value.title()) for i in InteractionType]


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    organizer_id = models.UUIDField()
    organizer_name = models.CharField(max_length=255, blank=True, default="")
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    venue_name = models.CharField(max_length=255)
    venue_address = models.CharField(max_length=255, blank=True, default="")
    venue_city = models.CharField(max_length=100)
    latitude = models.FloatField()
    longitude = models.FloatField()
    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=EventStatus.DRAFT.value
    )
    rating_mean = models.FloatField(default=0.0)
    rating_count = models.PositiveIntegerField(default=0)
    like_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["status", "starts_at"], name="discovery_event_status_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class TicketType(models.Model):
    """Persistence model for ticket types."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="ticket_types")
    name = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField()
    sold = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["event"], name="discovery_ticket_event_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.price}"


class InterestProfile(models.Model):
    """Persistence model for a user's explicit preferences."""

    user_id = models.UUIDField(unique=True)
    preferred_categories = models.JSONField(default=list, blank=True)
    price_preference = models.CharField(
        max_length=16, choices=PRICE_PREFERENCE_CHOICES, blank=True, default=""
    )
    preferred_city = models.CharField(max_length=100, blank=True, default="")
    max_travel_distance_km = models.FloatField(null=True, blank=True)
    followed_organizer_ids = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Profile {self.user_id}"


class CategoryInteraction(models.Model):
    """One counter per (profile, category, interaction type)."""

    profile = models.ForeignKey(
        InterestProfile, on_delete=models.CASCADE, related_name="interactions"
    )
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    interaction_type = models.CharField(max_length=16, choices=INTERACTION_CHOICES)
    count = models.PositiveIntegerField(default=0)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["profile", "category", "interaction_type"],
                name="unique_profile_category_interaction",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.category} {self.interaction_type}: {self.count}"
