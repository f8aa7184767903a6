from django.urls import path

from discovery.handlers import (
    FeedView,
    FollowDetailView,
    FollowListView,
    InteractionView,
    ProfileDetailView,
    ProfileResetView,
    RecommendationView,
)

urlpatterns = [
    path("recommendations", RecommendationView.as_view(), name="recommendations"),
    path("feed", FeedView.as_view(), name="feed"),
    path("interactions", InteractionView.as_view(), name="interactions"),
    path("profiles/<str:user_id>", ProfileDetailView.as_view(), name="profile-detail"),
    path(
        "profiles/<str:user_id>/follows",
        FollowListView.as_view(),
        name="profile-follows",
    ),
    path(
        "profiles/<str:user_id>/follows/<str:organizer_id>",
        FollowDetailView.as_view(),
        name="profile-follow-detail",
    ),
    path("profiles/<str:user_id>/reset", ProfileResetView.as_view(), name="profile-reset"),
]
