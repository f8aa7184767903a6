"""Unit tests for RecommendationEngine.

The default event from ``make_event`` is a paid, unrated Music event starting
tomorrow (a Thursday), so against a warm profile it scores only the
upcoming-soon bonus of 15.
Run with: pytest tests/test_engine.py -v
"""

import logging
import uuid
from datetime import UTC, datetime, timedelta

import pytest

from discovery.domain import (
    EventCategory,
    EventId,
    EventStatus,
    InteractionType,
    InterestProfile,
    PricePreference,
    Rating,
    Signal,
)
from discovery.scoring import RecommendationEngine, ScoringConfig
from helpers import ENTEBBE, KAMPALA, KAMPALA_TZ, NOW, SATURDAY, ticket


@pytest.fixture
def engine() -> RecommendationEngine:
    return RecommendationEngine()


@pytest.fixture
def warm_profile() -> InterestProfile:
    """A profile that is not cold but matches nothing in the default event."""
    return InterestProfile(preferred_categories={EventCategory.SPORTS_WELLNESS})


def score_one(engine, event, profile, location=None):
    [scored] = engine.score([event], profile, NOW, location)
    return scored


class TestSignals:
    """Each signal's contribution in isolation."""

    def test_baseline_event_scores_upcoming_only(self, engine, make_event, warm_profile):
        scored = score_one(engine, make_event(), warm_profile)
        assert scored.score == 15.0
        assert [c.signal for c in scored.contributions] == [Signal.UPCOMING_SOON]

    def test_category_match(self, engine, make_event):
        profile = InterestProfile(preferred_categories={EventCategory.MUSIC})
        scored = score_one(engine, make_event(), profile)
        assert scored.score == 55.0
        assert scored.has_signal(Signal.CATEGORY_MATCH)

    def test_purchase_affinity_scales_with_count(self, engine, make_event, warm_profile):
        warm_profile.record_interaction(EventCategory.MUSIC, InteractionType.PURCHASE)
        assert score_one(engine, make_event(), warm_profile).score == pytest.approx(15 + 35 / 3)

    def test_purchase_affinity_saturates(self, engine, make_event, warm_profile):
        for _ in range(5):
            warm_profile.record_interaction(EventCategory.MUSIC, InteractionType.PURCHASE)
        assert score_one(engine, make_event(), warm_profile).score == pytest.approx(15 + 35)

    def test_like_affinity(self, engine, make_event, warm_profile):
        warm_profile.record_interaction(EventCategory.MUSIC, InteractionType.LIKE)
        warm_profile.record_interaction(EventCategory.MUSIC, InteractionType.LIKE)
        scored = score_one(engine, make_event(), warm_profile)
        assert scored.score == pytest.approx(15 + 25 * 2 / 3)
        assert scored.has_signal(Signal.LIKE_AFFINITY)

    def test_views_add_no_affinity(self, engine, make_event, warm_profile):
        warm_profile.record_interaction(EventCategory.MUSIC, InteractionType.VIEW)
        assert score_one(engine, make_event(), warm_profile).score == 15.0

    def test_followed_organizer(self, engine, make_event, warm_profile):
        event = make_event()
        warm_profile.follow_organizer(event.organizer_id)
        scored = score_one(engine, event, warm_profile)
        assert scored.score == 45.0
        assert "EventMasters UG" in scored.reasons[0]

    def test_happening_now(self, engine, make_event, warm_profile):
        event = make_event(starts_at=NOW - timedelta(hours=1))
        scored = score_one(engine, event, warm_profile)
        assert scored.score == 25.0
        assert scored.reasons == ("Happening right now",)

    def test_same_city_is_case_insensitive(self, engine, make_event, warm_profile):
        warm_profile.preferred_city = " kampala"
        scored = score_one(engine, make_event(), warm_profile)
        assert scored.score == 35.0
        assert scored.has_signal(Signal.SAME_CITY)

    def test_within_travel_radius(self, engine, make_event, warm_profile):
        warm_profile.max_travel_distance_km = 50
        scored = score_one(engine, make_event(), warm_profile, location=ENTEBBE)
        assert scored.score == 30.0
        assert scored.has_signal(Signal.WITHIN_RADIUS)

    def test_outside_travel_radius_is_penalised(self, engine, make_event, warm_profile):
        warm_profile.max_travel_distance_km = 10
        scored = score_one(engine, make_event(), warm_profile, location=ENTEBBE)
        assert scored.score == 5.0
        assert scored.has_signal(Signal.OUTSIDE_RADIUS)

    def test_default_radius_when_profile_has_none(self, engine, make_event, warm_profile):
        assert score_one(engine, make_event(), warm_profile, location=KAMPALA).score == 30.0
        # Entebbe is beyond the default radius: no bonus, but no penalty either.
        assert score_one(engine, make_event(), warm_profile, location=ENTEBBE).score == 15.0

    def test_distance_signals_skipped_without_location(self, engine, make_event, warm_profile):
        warm_profile.max_travel_distance_km = 10
        warm_profile.preferred_city = "Kampala"
        scored = score_one(engine, make_event(), warm_profile, location=None)
        assert scored.score == 35.0
        assert not scored.has_signal(Signal.OUTSIDE_RADIUS)

    def test_upcoming_window_is_inclusive(self, engine, make_event, warm_profile):
        edge = make_event(starts_at=NOW + timedelta(days=7))
        beyond = make_event(starts_at=NOW + timedelta(days=7, minutes=1))
        assert score_one(engine, edge, warm_profile).has_signal(Signal.UPCOMING_SOON)
        assert not score_one(engine, beyond, warm_profile).has_signal(Signal.UPCOMING_SOON)

    def test_popular_and_highly_rated(self, engine, make_event, warm_profile, popular):
        scored = score_one(engine, make_event(**popular), warm_profile)
        assert scored.score == 30.0
        assert scored.has_signal(Signal.POPULAR)
        assert scored.has_signal(Signal.HIGH_RATING)

    def test_high_rating_without_sales_is_not_popular(self, engine, make_event, warm_profile):
        scored = score_one(engine, make_event(rating=Rating(4.8, 10)), warm_profile)
        assert scored.score == 20.0
        assert not scored.has_signal(Signal.POPULAR)

    def test_weekend(self, engine, make_event, warm_profile):
        scored = score_one(engine, make_event(starts_at=SATURDAY), warm_profile)
        assert scored.score == 25.0
        assert scored.has_signal(Signal.WEEKEND)

    def test_weekend_judged_in_local_time(self, make_event, warm_profile):
        engine = RecommendationEngine(ScoringConfig(time_zone=KAMPALA_TZ))
        # Friday 22:00 and Sunday 22:00 in UTC.
        saturday_night = make_event(starts_at=datetime(2026, 3, 7, 1, 0, tzinfo=KAMPALA_TZ).astimezone(UTC))
        monday_night = make_event(starts_at=datetime(2026, 3, 9, 1, 0, tzinfo=KAMPALA_TZ).astimezone(UTC))
        assert score_one(engine, saturday_night, warm_profile).has_signal(Signal.WEEKEND)
        assert not score_one(engine, monday_night, warm_profile).has_signal(Signal.WEEKEND)

    def test_price_match(self, engine, make_event, warm_profile):
        warm_profile.price_preference = PricePreference.BUDGET
        assert score_one(engine, make_event(), warm_profile).score == 23.0

    def test_any_price_preference_adds_nothing(self, engine, make_event, warm_profile):
        warm_profile.price_preference = PricePreference.ANY
        assert score_one(engine, make_event(), warm_profile).score == 15.0

    def test_free_event(self, engine, make_event, warm_profile):
        scored = score_one(engine, make_event(ticket_types=(ticket("0"),)), warm_profile)
        assert scored.score == 20.0
        assert scored.has_signal(Signal.FREE)

    def test_recently_added(self, engine, make_event, warm_profile):
        event = make_event(created_at=NOW - timedelta(days=2))
        assert score_one(engine, event, warm_profile).score == 20.0


class TestReasons:
    """Tests for explanation strings."""

    def test_reasons_ordered_by_contribution_and_capped(self, engine, make_event):
        event = make_event()
        profile = InterestProfile(preferred_categories={EventCategory.MUSIC}, preferred_city="Kampala")
        profile.follow_organizer(event.organizer_id)
        scored = score_one(engine, event, profile)
        assert scored.reasons == (
            "Matches your Music interests",
            "From EventMasters UG, an organizer you follow",
            "In Kampala",
        )
        assert scored.primary_reason == "Matches your Music interests"

    def test_small_contributions_give_no_reason(self, engine, make_event, warm_profile):
        event = make_event(ticket_types=(), created_at=NOW - timedelta(days=1), starts_at=NOW + timedelta(days=30))
        scored = score_one(engine, event, warm_profile)
        assert scored.score == 10.0
        assert scored.reasons == ()
        assert scored.primary_reason == "Popular event"

    def test_upcoming_reason_names_the_day(self, engine, make_event, warm_profile):
        assert score_one(engine, make_event(), warm_profile).reasons == ("Tomorrow",)
        in_two = make_event(starts_at=NOW + timedelta(days=2))
        assert score_one(engine, in_two, warm_profile).reasons == ("In 2 days",)

    def test_day_label_uses_local_date(self, make_event, warm_profile):
        engine = RecommendationEngine(ScoringConfig(time_zone=KAMPALA_TZ))
        late_evening = NOW.replace(hour=22, minute=30)
        event = make_event(starts_at=datetime(2026, 3, 5, 20, 0, tzinfo=KAMPALA_TZ))
        [scored] = engine.score([event], warm_profile, late_evening)
        assert scored.reasons == ("Today",)


class TestFiltering:
    """Tests for events the engine leaves out."""

    def test_empty_input(self, engine):
        assert engine.score([], InterestProfile(), NOW) == []

    def test_cancelled_and_ended_events_skipped(self, engine, make_event, warm_profile):
        events = [
            make_event(status=EventStatus.CANCELLED),
            make_event(starts_at=NOW - timedelta(hours=4)),
            make_event(status=EventStatus.COMPLETED),
        ]
        assert engine.score(events, warm_profile, NOW) == []

    def test_event_without_category_is_skipped(self, engine, make_event, warm_profile, caplog):
        good = make_event()
        bad = make_event(category=None)
        with caplog.at_level(logging.WARNING, logger="discovery"):
            scored = engine.score([bad, good], warm_profile, NOW)
        assert [s.event for s in scored] == [good]
        assert "no valid category" in caplog.text


class TestRanking:
    """Ordering, determinism and the documented scoring properties."""

    def test_descending_score(self, engine, make_event, warm_profile, popular):
        plain = make_event()
        hot = make_event(**popular)
        scored = engine.score([plain, hot], warm_profile, NOW)
        assert [s.event for s in scored] == [hot, plain]

    def test_ties_broken_by_start_then_id(self, engine, make_event, warm_profile):
        later = make_event(starts_at=NOW + timedelta(days=2))
        low_id = make_event(id=EventId(uuid.UUID(int=1)))
        high_id = make_event(id=EventId(uuid.UUID(int=2)), starts_at=low_id.starts_at)
        scored = engine.score([later, high_id, low_id], warm_profile, NOW)
        assert [s.event for s in scored] == [low_id, high_id, later]

    def test_deterministic(self, engine, make_event, popular):
        events = [make_event(category=c, **popular) for c in EventCategory] + [make_event()]
        profile = InterestProfile(preferred_categories={EventCategory.MUSIC}, max_travel_distance_km=5)
        profile.record_interaction(EventCategory.COMEDY, InteractionType.LIKE)
        first = engine.score(events, profile, NOW, ENTEBBE)
        second = engine.score(list(events), profile, NOW, ENTEBBE)
        assert first == second

    def test_purchases_never_lower_a_category_score(self, engine, make_event):
        event = make_event()
        profile = InterestProfile()
        previous = score_one(engine, event, profile).score
        for _ in range(25):
            profile.record_interaction(EventCategory.MUSIC, InteractionType.PURCHASE)
            current = score_one(engine, event, profile).score
            assert current >= previous
            previous = current

    def test_purchases_strictly_raise_score_until_saturation(self, engine, make_event, warm_profile):
        event = make_event()
        scores = []
        for _ in range(3):
            warm_profile.record_interaction(EventCategory.MUSIC, InteractionType.PURCHASE)
            scores.append(score_one(engine, event, warm_profile).score)
        assert scores[0] < scores[1] < scores[2]

    def test_happening_now_scores_higher(self, engine, make_event, warm_profile):
        """An ongoing event outscores an otherwise-identical upcoming one.

        An ongoing weekday event only ties an upcoming weekend event inside the
        upcoming window (25 against 15 + 10); its earlier start ranks it first.
        """
        ongoing = make_event(starts_at=NOW - timedelta(hours=1))
        upcoming = make_event(starts_at=NOW + timedelta(days=2))
        by_event = {s.event: s.score for s in engine.score([upcoming, ongoing], warm_profile, NOW)}
        assert by_event[ongoing] > by_event[upcoming]

    def test_ongoing_weekday_event_ranks_before_weekend_tie(self, engine, make_event, warm_profile):
        ongoing = make_event(starts_at=NOW - timedelta(hours=1))
        on_saturday = make_event(starts_at=SATURDAY)
        scored = engine.score([on_saturday, ongoing], warm_profile, NOW)
        assert [s.score for s in scored] == [25.0, 25.0]
        assert [s.event for s in scored] == [ongoing, on_saturday]

    def test_interest_example(self, engine, make_event):
        profile = InterestProfile(preferred_categories={EventCategory.MUSIC})
        profile.record_interaction(EventCategory.MUSIC, InteractionType.PURCHASE)
        music = make_event(category=EventCategory.MUSIC)
        sports = make_event(category=EventCategory.SPORTS_WELLNESS)
        scored = {s.event: s.score for s in engine.score([music, sports], profile, NOW)}
        assert scored[music] > scored[sports]


class TestColdStart:
    """Tests for the fallback used when little is known about the user."""

    def test_new_profile_is_cold(self, engine):
        assert engine.is_cold_start(InterestProfile())

    def test_low_confidence_is_cold(self, engine):
        profile = InterestProfile()
        profile.record_interaction(EventCategory.MUSIC, InteractionType.PURCHASE)
        assert engine.is_cold_start(profile)

    def test_enough_interactions_warm_up(self, engine):
        profile = InterestProfile()
        profile.record_interaction(EventCategory.MUSIC, InteractionType.VIEW)
        profile.record_interaction(EventCategory.MUSIC, InteractionType.VIEW)
        assert not engine.is_cold_start(profile)

    def test_explicit_categories_are_never_cold(self, engine):
        assert not engine.is_cold_start(InterestProfile(preferred_categories={EventCategory.MUSIC}))

    def test_interest_signals_suppressed(self, engine, make_event):
        profile = InterestProfile()
        profile.record_interaction(EventCategory.MUSIC, InteractionType.PURCHASE)
        scored = score_one(engine, make_event(), profile)
        assert scored.score == 15.0
        assert not scored.has_signal(Signal.PURCHASE_AFFINITY)

    def test_head_is_diversified_across_categories(self, make_event, popular):
        engine = RecommendationEngine(ScoringConfig(recommended_size=3))
        music = [make_event(category=EventCategory.MUSIC, **popular) for _ in range(4)]
        sports = make_event(category=EventCategory.SPORTS_WELLNESS)
        tech = make_event(category=EventCategory.TECHNOLOGY)
        scored = engine.score(music + [sports, tech], InterestProfile(), NOW)
        head = [s.event.category for s in scored[:3]]
        assert head.count(EventCategory.MUSIC) == 2
        assert head[2] in (EventCategory.SPORTS_WELLNESS, EventCategory.TECHNOLOGY)
        assert len(scored) == 6

    def test_warm_profile_is_not_diversified(self, make_event, popular):
        engine = RecommendationEngine(ScoringConfig(recommended_size=3))
        profile = InterestProfile(preferred_categories={EventCategory.MUSIC})
        music = [make_event(category=EventCategory.MUSIC, **popular) for _ in range(4)]
        scored = engine.score(music + [make_event(category=EventCategory.TECHNOLOGY)], profile, NOW)
        assert all(s.event.category is EventCategory.MUSIC for s in scored[:3])


class TestScoringConfig:
    """Tests for configuration overrides."""

    def test_weight_override(self, make_event):
        config = ScoringConfig.from_mapping({"WEIGHTS": {"CATEGORY_MATCH": 100}})
        profile = InterestProfile(preferred_categories={EventCategory.MUSIC})
        scored = score_one(RecommendationEngine(config), make_event(), profile)
        assert scored.score == 115.0

    def test_window_override_in_days(self):
        config = ScoringConfig.from_mapping({"UPCOMING_WINDOW": 3})
        assert config.upcoming_window == timedelta(days=3)

    def test_time_zone_from_name(self):
        assert ScoringConfig.from_mapping({"TIME_ZONE": "Africa/Kampala"}).time_zone == KAMPALA_TZ

    def test_time_zone_defaults_to_django_setting(self):
        assert ScoringConfig.from_settings().time_zone == KAMPALA_TZ

    def test_unknown_setting_rejected(self):
        with pytest.raises(ValueError):
            ScoringConfig.from_mapping({"NOT_A_SETTING": 1})
