"""Pytest configuration and shared fixtures."""

import uuid
from datetime import timedelta

import pytest
from rest_framework.test import APIClient

from discovery.domain import (
    Event,
    EventCategory,
    EventId,
    EventStatus,
    OrganizerId,
    Rating,
    Venue,
)
from helpers import KAMPALA, NOW, ticket


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_event():
    """Factory for domain events. Defaults to a plain paid Music event tomorrow in Kampala."""

    def factory(**overrides) -> Event:
        starts_at = overrides.pop("starts_at", NOW + timedelta(days=1))
        fields = {
            "id": EventId(uuid.uuid4()),
            "title": "Kampala Live",
            "category": EventCategory.MUSIC,
            "starts_at": starts_at,
            "ends_at": starts_at + timedelta(hours=3),
            "venue": Venue(
                name="Serena",
                address="Kintu Road",
                city="Kampala",
                coordinate=KAMPALA,
            ),
            "organizer_id": OrganizerId(uuid.uuid4()),
            "organizer_name": "EventMasters UG",
            "created_at": NOW - timedelta(days=30),
            "status": EventStatus.PUBLISHED,
            "rating": Rating(),
            "ticket_types": (ticket(),),
        }
        fields.update(overrides)
        return Event(**fields)

    return factory


@pytest.fixture
def popular():
    """Overrides that make an event popular and highly rated."""
    return {"rating": Rating(4.5, 120), "ticket_types": (ticket(sold=80),)}


@pytest.fixture
def db_event(db):
    """Factory for persisted events with one ticket type. Pass ticket_price=None for none."""
    from discovery import models

    def factory(**overrides) -> models.Event:
        starts_at = overrides.pop("starts_at", NOW + timedelta(days=1))
        ticket_price = overrides.pop("ticket_price", "20000")
        sold = overrides.pop("sold", 10)
        fields = {
            "title": "Kampala Live",
            "category": EventCategory.MUSIC.value,
            "organizer_id": uuid.uuid4(),
            "organizer_name": "EventMasters UG",
            "starts_at": starts_at,
            "ends_at": starts_at + timedelta(hours=3),
            "venue_name": "Serena",
            "venue_city": "Kampala",
            "latitude": KAMPALA.latitude,
            "longitude": KAMPALA.longitude,
            "status": EventStatus.PUBLISHED.value,
        }
        fields.update(overrides)
        event = models.Event.objects.create(**fields)
        if ticket_price is not None:
            models.TicketType.objects.create(
                event=event, name="General", price=ticket_price, quantity=100, sold=sold
            )
        return event

    return factory
