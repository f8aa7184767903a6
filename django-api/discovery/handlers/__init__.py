from discovery.handlers.views import (
    FeedView,
    FollowDetailView,
    FollowListView,
    InteractionView,
    ProfileDetailView,
    ProfileResetView,
    RecommendationView,
)

__all__ = [
    "FeedView",
    "FollowDetailView",
    "FollowListView",
    "InteractionView",
    "ProfileDetailView",
    "ProfileResetView",
    "RecommendationView",
]
