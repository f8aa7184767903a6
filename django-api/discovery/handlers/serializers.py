"""Serializers for request parsing and for rendering domain models."""

from rest_framework import serializers

from discovery.domain import EventCategory, InteractionType, PricePreference

CATEGORY_VALUES = [c.value for c in EventCategory]
INTERACTION_VALUES = [i.value for i in InteractionType]
PRICE_PREFERENCE_VALUES = [p.value for p in PricePreference]


class LocationSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90.0, max_value=90.0)
    longitude = serializers.FloatField(min_value=-180.0, max_value=180.0)


class FeedRequestSerializer(serializers.Serializer):
    """Body of POST /api/feed."""

    userId = serializers.CharField()
    now = serializers.DateTimeField(required=False)
    location = LocationSerializer(required=False, allow_null=True)


class RecommendationRequestSerializer(FeedRequestSerializer):
    """Body of POST /api/recommendations."""

    limit = serializers.IntegerField(required=False, min_value=1, max_value=100)


class InteractionRequestSerializer(serializers.Serializer):
    """Body of POST /api/interactions."""

    userId = serializers.CharField()
    eventId = serializers.CharField()
    category = serializers.ChoiceField(choices=CATEGORY_VALUES, required=False, allow_null=True)
    type = serializers.ChoiceField(choices=INTERACTION_VALUES)


class PreferencesSerializer(serializers.Serializer):
    """Body of PUT /api/profiles/{userId}. Omitted fields are left unchanged."""

    preferredCategories = serializers.ListField(
        child=serializers.ChoiceField(choices=CATEGORY_VALUES), required=False
    )
    pricePreference = serializers.ChoiceField(
        choices=PRICE_PREFERENCE_VALUES, required=False, allow_null=True
    )
    preferredCity = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=100
    )
    maxTravelDistanceKm = serializers.FloatField(required=False, allow_null=True, min_value=0.0)


class FollowSerializer(serializers.Serializer):
    organizerId = serializers.CharField()


class ScoredEventSerializer(serializers.Serializer):
    """Serializer for the ScoredEvent domain model."""

    eventId = serializers.CharField(source="event.id")
    title = serializers.CharField(source="event.title")
    category = serializers.SerializerMethodField()
    startsAt = serializers.DateTimeField(source="event.starts_at")
    score = serializers.FloatField()
    reasons = serializers.ListField(child=serializers.CharField())

    def get_category(self, obj) -> str:
        return obj.event.category.value


class FeedSectionSerializer(serializers.Serializer):
    """Serializer for the FeedSection domain model."""

    kind = serializers.SerializerMethodField()
    title = serializers.CharField()
    events = ScoredEventSerializer(many=True)

    def get_kind(self, obj) -> str:
        return obj.kind.value


class InterestProfileSerializer(serializers.Serializer):
    """Serializer for the InterestProfile domain model."""

    preferredCategories = serializers.SerializerMethodField()
    pricePreference = serializers.SerializerMethodField()
    preferredCity = serializers.CharField(source="preferred_city", allow_null=True)
    maxTravelDistanceKm = serializers.FloatField(source="max_travel_distance_km", allow_null=True)
    followedOrganizerIds = serializers.SerializerMethodField()
    inferredWeights = serializers.SerializerMethodField()
    totalInteractions = serializers.IntegerField(source="total_interactions")
    confidence = serializers.SerializerMethodField()
    isNewUser = serializers.SerializerMethodField()
    topCategories = serializers.SerializerMethodField()

    def get_preferredCategories(self, obj) -> list[str]:
        return sorted(c.value for c in obj.preferred_categories)

    def get_pricePreference(self, obj) -> str | None:
        return obj.price_preference.value if obj.price_preference else None

    def get_followedOrganizerIds(self, obj) -> list[str]:
        return sorted(str(o) for o in obj.followed_organizer_ids)

    def get_inferredWeights(self, obj) -> dict[str, float]:
        return {c.value: w for c, w in obj.inferred_weights.items()}

    def get_confidence(self, obj) -> float:
        return obj.confidence_score()

    def get_isNewUser(self, obj) -> bool:
        return obj.is_new_user()

    def get_topCategories(self, obj) -> list[str]:
        return [c.value for c in obj.top_categories()]
