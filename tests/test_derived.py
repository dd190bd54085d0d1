from datetime import datetime, timedelta, timezone

import pytest

from trackmyrun.models.derived import (
    compute_pace,
    consistency_week,
    round_half_up,
    training_load_score,
)


def test_pace_is_minutes_per_km_for_runs():
    assert compute_pace("Run", 10000, 3000) == pytest.approx(5.0)
    assert compute_pace("TrailRun", 5000, 1800) == pytest.approx(6.0)
    assert compute_pace("VirtualRun", 21097.5, 6300) == pytest.approx(105 / 21.0975)


def test_pace_skips_non_runs_and_empty_distance():
    assert compute_pace("Ride", 40000, 4000) is None
    assert compute_pace("Run", 0, 600) is None
    assert compute_pace(None, 1000, 300) is None


def test_training_load_defaults_hr_factor():
    assert training_load_score(3600, None) == 42
    assert training_load_score(3600, 0) == 42


def test_training_load_scales_with_heart_rate():
    assert training_load_score(3600, 180) == 60
    assert training_load_score(1800, 150) == 25
    assert training_load_score(0, 150) is None


def test_week_bucket_starts_on_sunday():
    # 2025-01-01 is a Wednesday.
    assert consistency_week(datetime(2025, 1, 1, 7)) == 202501
    assert consistency_week(datetime(2025, 1, 4, 23, 59)) == 202501
    assert consistency_week(datetime(2025, 1, 5)) == 202502
    assert consistency_week(datetime(2025, 12, 31)) == 202553


def test_week_bucket_uses_utc_date():
    aware = datetime(2025, 1, 5, 1, 0, tzinfo=timezone(timedelta(hours=3)))
    assert consistency_week(aware) == 202501


def test_week_bucket_is_monotonic_within_year():
    day = datetime(2024, 1, 1)
    previous = consistency_week(day)
    while day.year == 2024:
        current = consistency_week(day)
        assert current >= previous
        previous = current
        day += timedelta(hours=13)


def test_round_half_up_matches_js_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(0.49) == 0


def test_derived_fields_are_set_on_insert_and_update(session, user, add_activity):
    activity = add_activity(user.id, datetime(2025, 1, 5, 8), distance=5000.0, moving_time=1500)
    assert activity.pace == pytest.approx(5.0)
    assert activity.consistency_week == 202502
    assert activity.training_load_score == 18

    activity.distance = 6000.0
    activity.average_heartrate = 180.0
    session.add(activity)
    session.commit()
    session.refresh(activity)

    assert activity.pace == pytest.approx(25 / 6)
    assert activity.training_load_score == 25


def test_sport_change_clears_pace(session, user, add_activity):
    activity = add_activity(user.id, datetime(2025, 2, 1))
    activity.sport_type = "Ride"
    session.add(activity)
    session.commit()
    session.refresh(activity)
    assert activity.pace is None
