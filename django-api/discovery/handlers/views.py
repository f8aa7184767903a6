"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from discovery.domain import Coordinate, EventCategory, InteractionType
from discovery.domain.errors import DomainError, ErrorCode
from discovery.handlers.serializers import (
    FeedRequestSerializer,
    FeedSectionSerializer,
    FollowSerializer,
    InteractionRequestSerializer,
    InterestProfileSerializer,
    PreferencesSerializer,
    RecommendationRequestSerializer,
    ScoredEventSerializer,
)
from discovery.scoring import DiscoveryFeedBuilder, RecommendationEngine, ScoringConfig
from discovery.services import DiscoveryService

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_USER_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PROFILE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_STATUS_TRANSITION: status.HTTP_409_CONFLICT,
}


def build_discovery_service() -> DiscoveryService:
    """Wire a service for one request from the Django stores and settings."""
    from discovery.stores.django_store import DjangoEventStore, DjangoProfileStore

    config = ScoringConfig.from_settings()
    return DiscoveryService(
        event_store=DjangoEventStore(),
        profile_store=DjangoProfileStore(),
        engine=RecommendationEngine(config),
        feed_builder=DiscoveryFeedBuilder(config),
    )


def error_response(err: DomainError) -> Response:
    return Response(
        {"error": {"code": err.code.value, "message": err.message}},
        status=ERROR_STATUS.get(err.code, status.HTTP_400_BAD_REQUEST),
    )


class DiscoveryAPIView(APIView):
    """Base view: builds the service and maps domain errors."""

    service_factory = staticmethod(build_discovery_service)

    @property
    def service(self) -> DiscoveryService:
        if not hasattr(self, "_service"):
            self._service = self.service_factory()
        return self._service

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            logger.info("Request rejected: %s", exc)
            return error_response(exc)
        return super().handle_exception(exc)


def _location(data: dict) -> Coordinate | None:
    location = data.get("location")
    if not location:
        return None
    return Coordinate(location["latitude"], location["longitude"])


class RecommendationView(DiscoveryAPIView):
    """Handler for POST /api/recommendations"""

    def post(self, request: Request) -> Response:
        serializer = RecommendationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        scored = self.service.get_recommendations(
            data["userId"],
            now=data.get("now") or timezone.now(),
            location=_location(data),
            limit=data.get("limit"),
        )
        return Response({"results": ScoredEventSerializer(scored, many=True).data})


class FeedView(DiscoveryAPIView):
    """Handler for POST /api/feed"""

    def post(self, request: Request) -> Response:
        serializer = FeedRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        sections = self.service.get_feed(
            data["userId"],
            now=data.get("now") or timezone.now(),
            location=_location(data),
        )
        return Response({"sections": FeedSectionSerializer(sections, many=True).data})


class InteractionView(DiscoveryAPIView):
    """Handler for POST /api/interactions"""

    def post(self, request: Request) -> Response:
        serializer = InteractionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        category = data.get("category")
        self.service.record_interaction(
            data["userId"],
            data["eventId"],
            InteractionType(data["type"]),
            category=EventCategory(category) if category else None,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProfileDetailView(DiscoveryAPIView):
    """Handler for GET and PUT /api/profiles/{user_id}"""

    def get(self, request: Request, user_id: str) -> Response:
        profile = self.service.get_profile(user_id)
        return Response(InterestProfileSerializer(profile).data)

    def put(self, request: Request, user_id: str) -> Response:
        serializer = PreferencesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        updates = {}
        if "preferredCategories" in data:
            updates["preferred_categories"] = [EventCategory(c) for c in data["preferredCategories"]]
        if "pricePreference" in data:
            updates["price_preference"] = data["pricePreference"]
        if "preferredCity" in data:
            updates["preferred_city"] = data["preferredCity"]
        if "maxTravelDistanceKm" in data:
            updates["max_travel_distance_km"] = data["maxTravelDistanceKm"]
        profile = self.service.update_preferences(user_id, **updates)
        return Response(InterestProfileSerializer(profile).data)


class FollowListView(DiscoveryAPIView):
    """Handler for POST /api/profiles/{user_id}/follows"""

    def post(self, request: Request, user_id: str) -> Response:
        serializer = FollowSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.service.follow_organizer(user_id, serializer.validated_data["organizerId"])
        return Response(status=status.HTTP_204_NO_CONTENT)


class FollowDetailView(DiscoveryAPIView):
    """Handler for DELETE /api/profiles/{user_id}/follows/{organizer_id}"""

    def delete(self, request: Request, user_id: str, organizer_id: str) -> Response:
        self.service.unfollow_organizer(user_id, organizer_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProfileResetView(DiscoveryAPIView):
    """Handler for POST /api/profiles/{user_id}/reset"""

    def post(self, request: Request, user_id: str) -> Response:
        self.service.reset_profile(user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
