"""Read-only aggregation queries over a user's activities.

Every function takes the session and the owning user id, applies the optional
filters, and returns a JSON-ready dict. Time windows are evaluated against
``now`` (UTC), which callers may pin for reproducible results.
"""

from __future__ import annotations

import bisect
import math
import statistics
from collections import Counter
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import extract, func
from sqlmodel import Session, select

from ..core import DEFAULT_MAX_HR, as_utc, utcnow
from ..models import Activity
from ..models.derived import consistency_week, round_half_up
from .serializers import activity_to_dict, isoformat

PACE_BUCKETS = [0, 4, 4.5, 5, 5.5, 6, 6.5, 7, 7.5, 8, 9, 10, 12, 15]
PACE_OVERFLOW_BUCKET = "15+"

HR_ZONES = [
    ("Zone 1 (Recovery)", 0.0, 0.6),
    ("Zone 2 (Aerobic)", 0.6, 0.7),
    ("Zone 3 (Tempo)", 0.7, 0.8),
    ("Zone 4 (Threshold)", 0.8, 0.9),
    ("Zone 5 (Max)", 0.9, 1.0),
]

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

MARATHON_KM = 42.195


# Query helpers --------------------------------------------------------------


def _now(now: Optional[datetime]) -> datetime:
    return as_utc(now or utcnow())


def year_bounds(year: int) -> tuple[datetime, datetime]:
    return datetime(year, 1, 1, tzinfo=timezone.utc), datetime(year + 1, 1, 1, tzinfo=timezone.utc)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        return start, datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    return start, datetime(year, month + 1, 1, tzinfo=timezone.utc)


def _filters(
    user_id: int,
    *,
    sport_type: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Any]:
    clauses: List[Any] = [Activity.user_id == user_id]
    if sport_type:
        clauses.append(Activity.sport_type == sport_type)
    if start is not None:
        clauses.append(Activity.start_date >= start)
    if end is not None:
        clauses.append(Activity.start_date < end)
    return clauses


def _running_filters(clauses: List[Any]) -> List[Any]:
    return [
        *clauses,
        func.lower(Activity.sport_type).like("%run%"),
        Activity.pace.is_not(None),
        Activity.pace > 0,
    ]


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def _row_dict(row: Any) -> Dict[str, Any]:
    return {key: _plain(value) for key, value in row._mapping.items()}


def _sum(column):
    return func.coalesce(func.sum(column), 0)


def _aggregate(
    session: Session, clauses: List[Any], defaults: Dict[str, Any], **columns: Any
) -> Dict[str, Any]:
    """Run a single-group aggregate; ``defaults`` is returned when nothing matches."""

    count = func.count(Activity.id).label("_count")
    stmt = select(count, *[expr.label(name) for name, expr in columns.items()]).where(*clauses)
    data = _row_dict(session.exec(stmt).one())
    if not data.pop("_count"):
        return dict(defaults)
    return data


def _group(
    session: Session, clauses: List[Any], key: Any, **columns: Any
) -> List[Dict[str, Any]]:
    stmt = (
        select(key.label("_id"), *[expr.label(name) for name, expr in columns.items()])
        .where(*clauses)
        .group_by(key)
    )
    return [_row_dict(row) for row in session.exec(stmt).all()]


def _monthly(session: Session, clauses: List[Any], **columns: Any) -> List[Dict[str, Any]]:
    year_col = extract("year", Activity.start_date)
    month_col = extract("month", Activity.start_date)
    stmt = (
        select(
            year_col.label("_year"),
            month_col.label("_month"),
            *[expr.label(name) for name, expr in columns.items()],
        )
        .where(*clauses)
        .group_by(year_col, month_col)
        .order_by(year_col, month_col)
    )
    out = []
    for row in session.exec(stmt).all():
        data = _row_dict(row)
        key = {"year": int(data.pop("_year")), "month": int(data.pop("_month"))}
        out.append({"_id": key, **data})
    return out


def _first(session: Session, clauses: List[Any], *order_by: Any) -> Optional[Dict[str, Any]]:
    activity = session.exec(select(Activity).where(*clauses).order_by(*order_by)).first()
    return activity_to_dict(activity) if activity else None


def percent_change(current: float, previous: float) -> int:
    if not previous:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)


# Listing --------------------------------------------------------------------


def list_activities(
    session: Session,
    user_id: int,
    *,
    page: int = 1,
    limit: int = 20,
    sport_type: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> Dict[str, Any]:
    start = end = None
    if year and month:
        start, end = month_bounds(year, month)
    elif year:
        start, end = year_bounds(year)
    clauses = _filters(user_id, sport_type=sport_type, start=start, end=end)

    total = session.exec(select(func.count(Activity.id)).where(*clauses)).one()
    activities = session.exec(
        select(Activity)
        .where(*clauses)
        .order_by(Activity.start_date.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return {
        "activities": [activity_to_dict(activity) for activity in activities],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        },
    }


# Dashboard ------------------------------------------------------------------


def get_summary(
    session: Session,
    user_id: int,
    *,
    period: str = "all",
    year: Optional[int] = None,
    sport_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    current = _now(now)
    start = end = None
    if period == "week":
        start = current - timedelta(days=7)
    elif period == "month":
        start = current - timedelta(days=30)
    elif period == "year" or year:
        start, end = year_bounds(year or current.year)
    clauses = _filters(user_id, sport_type=sport_type, start=start, end=end)

    summary = _aggregate(
        session,
        clauses,
        {"total_distance": 0, "total_time": 0, "total_elevation": 0, "total_activities": 0},
        total_distance=_sum(Activity.distance),
        total_time=_sum(Activity.moving_time),
        total_elevation=_sum(Activity.total_elevation_gain),
        total_activities=func.count(Activity.id),
        avg_distance=func.avg(Activity.distance),
        avg_time=func.avg(Activity.moving_time),
        avg_speed=func.avg(Activity.average_speed),
        avg_heartrate=func.avg(Activity.average_heartrate),
        max_distance=func.max(Activity.distance),
        max_speed=func.max(Activity.max_speed),
    )
    breakdown = _group(
        session,
        clauses,
        Activity.sport_type,
        count=func.count(Activity.id),
        distance=_sum(Activity.distance),
        time=_sum(Activity.moving_time),
    )
    breakdown.sort(key=lambda item: -item["count"])
    return {"summary": summary, "sportBreakdown": breakdown}


def get_trends(
    session: Session,
    user_id: int,
    *,
    period: str = "month",
    sport_type: Optional[str] = None,
) -> Dict[str, Any]:
    clauses = _filters(user_id, sport_type=sport_type)
    columns = dict(
        distance=_sum(Activity.distance),
        time=_sum(Activity.moving_time),
        activities=func.count(Activity.id),
        avg_pace=func.avg(Activity.pace),
        avg_heartrate=func.avg(Activity.average_heartrate),
    )
    if period != "week":
        return {"trends": _monthly(session, clauses, **columns)}

    weekly = _group(session, clauses, Activity.consistency_week, **columns)
    weekly.sort(key=lambda item: item["_id"] or 0)
    for item in weekly:
        bucket = item["_id"] or 0
        item["_id"] = {"year": bucket // 100, "week": bucket % 100}
    return {"trends": weekly}


def get_personal_bests(
    session: Session, user_id: int, *, sport_type: Optional[str] = None
) -> Dict[str, Any]:
    clauses = _filters(user_id, sport_type=sport_type)
    return {
        "longestDistance": _first(session, clauses, Activity.distance.desc()),
        "longestTime": _first(session, clauses, Activity.moving_time.desc()),
        "fastestPace": _first(session, _running_filters(clauses), Activity.pace.asc()),
        "highestElevation": _first(session, clauses, Activity.total_elevation_gain.desc()),
        "mostKudos": _first(session, clauses, Activity.kudos_count.desc()),
    }


def _fun_insights(total_distance: float, total_time: float) -> List[str]:
    total_km = (total_distance or 0) / 1000
    insights: List[str] = []
    if total_km <= 0:
        return insights
    if total_km >= MARATHON_KM:
        marathons = math.floor(total_km / MARATHON_KM)
        plural = "s" if marathons > 1 else ""
        insights.append(f"You ran the equivalent of {marathons} marathon{plural}!")
    if total_km >= 10:
        insights.append(f"That's {math.floor(total_km / 10)} trips around a running track!")
    total_hours = (total_time or 0) / 3600
    if total_hours >= 24:
        insights.append(f"You spent {math.floor(total_hours / 24)} full days exercising!")
    return insights


def get_year_in_sport(
    session: Session, user_id: int, year: Optional[int] = None, *, now: Optional[datetime] = None
) -> Dict[str, Any]:
    year = year or _now(now).year
    start, end = year_bounds(year)
    clauses = _filters(user_id, start=start, end=end)

    overall = _aggregate(
        session,
        clauses,
        {"total_distance": 0, "total_time": 0, "total_elevation": 0, "total_activities": 0},
        total_distance=_sum(Activity.distance),
        total_time=_sum(Activity.moving_time),
        total_elevation=_sum(Activity.total_elevation_gain),
        total_activities=func.count(Activity.id),
        total_kudos=_sum(Activity.kudos_count),
    )

    monthly = _group(
        session,
        clauses,
        extract("month", Activity.start_date),
        activities=func.count(Activity.id),
        distance=_sum(Activity.distance),
    )
    monthly.sort(key=lambda item: (-item["activities"], item["_id"]))

    weekdays = _group(
        session, clauses, extract("dow", Activity.start_date), count=func.count(Activity.id)
    )
    weekdays.sort(key=lambda item: (-item["count"], item["_id"]))

    breakdown = _group(
        session,
        clauses,
        Activity.sport_type,
        count=func.count(Activity.id),
        distance=_sum(Activity.distance),
        time=_sum(Activity.moving_time),
    )
    breakdown.sort(key=lambda item: -item["distance"])

    return {
        "year": year,
        "overall": overall,
        "mostActiveMonth": {"month": int(monthly[0]["_id"])} if monthly else None,
        "favoriteDay": DAY_NAMES[int(weekdays[0]["_id"])] if weekdays else None,
        "sportBreakdown": breakdown,
        "longestActivity": _first(session, clauses, Activity.distance.desc()),
        "fastestPace": _first(session, _running_filters(clauses), Activity.pace.asc()),
        "funInsights": _fun_insights(overall["total_distance"], overall["total_time"]),
    }


# Advanced analytics ---------------------------------------------------------


_ROLLING_DEFAULTS = {
    "total_distance": 0,
    "total_time": 0,
    "total_elevation": 0,
    "total_activities": 0,
    "avg_pace": 0,
    "avg_heartrate": 0,
    "total_kudos": 0,
    "total_training_load": 0,
}


def _window_stats(session: Session, user_id: int, start: datetime) -> Dict[str, Any]:
    return _aggregate(
        session,
        _filters(user_id, start=start),
        _ROLLING_DEFAULTS,
        total_distance=_sum(Activity.distance),
        total_time=_sum(Activity.moving_time),
        total_elevation=_sum(Activity.total_elevation_gain),
        total_activities=func.count(Activity.id),
        avg_pace=func.avg(Activity.pace),
        avg_heartrate=func.avg(Activity.average_heartrate),
        total_kudos=_sum(Activity.kudos_count),
        total_training_load=_sum(Activity.training_load_score),
    )


def get_rolling_stats(
    session: Session, user_id: int, *, now: Optional[datetime] = None
) -> Dict[str, Any]:
    current = _now(now)
    return {
        f"rolling_{days}_days": _window_stats(session, user_id, current - timedelta(days=days))
        for days in (7, 30, 90)
    }


def pace_distribution(paces: List[float]) -> List[Dict[str, Any]]:
    """Bucket paces like a ``$bucket`` stage: ``[lower, next)`` plus an overflow bucket."""

    counts: Counter = Counter()
    for pace in paces:
        if pace < PACE_BUCKETS[0] or pace >= PACE_BUCKETS[-1]:
            counts[PACE_OVERFLOW_BUCKET] += 1
            continue
        counts[PACE_BUCKETS[bisect.bisect_right(PACE_BUCKETS, pace) - 1]] += 1

    out = [{"_id": bound, "count": counts[bound]} for bound in PACE_BUCKETS[:-1] if counts[bound]]
    if counts[PACE_OVERFLOW_BUCKET]:
        out.append({"_id": PACE_OVERFLOW_BUCKET, "count": counts[PACE_OVERFLOW_BUCKET]})
    return out


def get_pace_analysis(
    session: Session, user_id: int, *, year: Optional[int] = None
) -> Dict[str, Any]:
    start, end = year_bounds(year) if year else (None, None)
    clauses = _running_filters(_filters(user_id, start=start, end=end))

    paces = [float(pace) for pace in session.exec(select(Activity.pace).where(*clauses)).all()]
    average_stats = {"avg_pace": 0, "median_pace": 0, "total_runs": 0}
    if paces:
        average_stats = {
            "avg_pace": statistics.fmean(paces),
            "median_pace": statistics.median(paces),
            "total_runs": len(paces),
        }

    return {
        "distribution": pace_distribution(paces),
        "trend": _monthly(
            session,
            clauses,
            avg_pace=func.avg(Activity.pace),
            best_pace=func.min(Activity.pace),
            activities=func.count(Activity.id),
        ),
        "bestPace": _first(session, clauses, Activity.pace.asc()),
        "averageStats": average_stats,
    }


def longest_streak(weeks: List[int]) -> int:
    """Longest run of consecutive week buckets (same-year numbering assumed)."""

    longest = current = 0
    previous = None
    for week in sorted(set(weeks)):
        current = current + 1 if previous is not None and week == previous + 1 else 1
        longest = max(longest, current)
        previous = week
    return longest


def current_streak(weeks: List[int], this_week: int, max_weeks: int = 52) -> int:
    active = set(weeks)
    streak = 0
    for week in range(this_week, this_week - max_weeks - 1, -1):
        if week not in active:
            break
        streak += 1
    return streak


def consistency_score(weeks_with_activity: int, weeks_elapsed: int) -> int:
    return min(100, round_half_up(weeks_with_activity / max(weeks_elapsed, 1) * 100))


def get_consistency(
    session: Session, user_id: int, *, now: Optional[datetime] = None
) -> Dict[str, Any]:
    current = _now(now)
    year_start, _ = year_bounds(current.year)

    weekly = _group(
        session,
        _filters(user_id, start=year_start),
        Activity.consistency_week,
        activities=func.count(Activity.id),
        distance=_sum(Activity.distance),
    )
    weekly.sort(key=lambda item: item["_id"] or 0)
    weeks = [item["_id"] for item in weekly if item["_id"] is not None]

    weeks_so_far = max(1, math.ceil((current - year_start) / timedelta(weeks=1)))
    return {
        "consistencyScore": consistency_score(len(weekly), weeks_so_far),
        "weeksWithActivity": len(weekly),
        "weeksSoFar": weeks_so_far,
        "currentStreak": current_streak(weeks, consistency_week(current)),
        "longestStreak": longest_streak(weeks),
        "weeklyBreakdown": weekly,
    }


def classify_training_status(acwr: float) -> str:
    if acwr < 0.8:
        return "undertrained"
    if acwr > 1.5:
        return "high_risk"
    if acwr > 1.3:
        return "elevated"
    return "optimal"


def acute_chronic_ratio(acute_load: float, chronic_load: float) -> float:
    if chronic_load <= 0:
        return 0
    return round(acute_load / chronic_load, 2)


def get_training_load(
    session: Session, user_id: int, *, now: Optional[datetime] = None
) -> Dict[str, Any]:
    current = _now(now)

    weekly = _group(
        session,
        _filters(user_id, start=current - timedelta(days=56)),
        Activity.consistency_week,
        total_load=_sum(Activity.training_load_score),
        total_distance=_sum(Activity.distance),
        total_time=_sum(Activity.moving_time),
        activities=func.count(Activity.id),
    )
    weekly.sort(key=lambda item: item["_id"] or 0)
    weekly = weekly[-8:]

    def load_since(days: int) -> float:
        stmt = select(_sum(Activity.training_load_score)).where(
            *_filters(user_id, start=current - timedelta(days=days))
        )
        return _plain(session.exec(stmt).one()) or 0

    acute_load = load_since(7)
    chronic_load = load_since(28) / 4
    acwr = acute_chronic_ratio(acute_load, chronic_load)
    return {
        "acuteLoad": acute_load,
        "chronicLoad": round_half_up(chronic_load),
        "acwr": acwr,
        "trainingStatus": classify_training_status(acwr),
        "weeklyLoads": weekly,
    }


def get_kudos_analysis(
    session: Session, user_id: int, *, year: Optional[int] = None
) -> Dict[str, Any]:
    start, end = year_bounds(year) if year else (None, None)
    clauses = _filters(user_id, start=start, end=end)

    overall = _aggregate(
        session,
        clauses,
        {"total_kudos": 0, "avg_kudos": 0, "max_kudos": 0, "total_activities": 0},
        total_kudos=_sum(Activity.kudos_count),
        avg_kudos=func.avg(Activity.kudos_count),
        max_kudos=func.max(Activity.kudos_count),
        total_activities=func.count(Activity.id),
    )
    by_sport = _group(
        session,
        clauses,
        Activity.sport_type,
        total_kudos=_sum(Activity.kudos_count),
        avg_kudos=func.avg(Activity.kudos_count),
        count=func.count(Activity.id),
    )
    by_sport.sort(key=lambda item: -item["total_kudos"])

    top = session.exec(
        select(Activity).where(*clauses).order_by(Activity.kudos_count.desc()).limit(5)
    ).all()
    top_activities = [
        {
            "id": activity.id,
            "name": activity.name,
            "kudos_count": activity.kudos_count,
            "distance": activity.distance,
            "start_date": isoformat(activity.start_date),
            "sport_type": activity.sport_type,
        }
        for activity in top
    ]

    rows = session.exec(
        select(Activity.kudos_count, Activity.distance, Activity.moving_time).where(
            *clauses, Activity.distance > 0
        )
    ).all()
    engagement = {"kudos_per_km": 0, "kudos_per_hour": 0}
    if rows:
        per_km = [kudos / (distance / 1000) for kudos, distance, _ in rows]
        per_hour = [kudos / (moving / 3600) for kudos, _, moving in rows if moving]
        engagement = {
            "kudos_per_km": statistics.fmean(per_km),
            "kudos_per_hour": statistics.fmean(per_hour) if per_hour else 0,
        }

    return {
        "overall": overall,
        "bySport": by_sport,
        "trend": _monthly(
            session,
            clauses,
            total_kudos=_sum(Activity.kudos_count),
            activities=func.count(Activity.id),
        ),
        "topActivities": top_activities,
        "engagement": engagement,
    }


def zone_breakdown(samples: List[tuple], max_hr: int) -> List[Dict[str, Any]]:
    """Assign ``(average_heartrate, moving_time)`` samples to fixed HR zones.

    Only activity-level averages exist, so each activity counts entirely
    towards the zone its average falls in.
    """

    zones = []
    for index, (name, low, high) in enumerate(HR_ZONES, start=1):
        zone_min = low * max_hr
        zone_max = high * max_hr
        in_zone = [(hr, moving) for hr, moving in samples if hr and zone_min <= hr < zone_max]
        zones.append(
            {
                "zone": index,
                "name": name,
                "minHR": round_half_up(zone_min),
                "maxHR": round_half_up(zone_max),
                "totalTime": sum(moving or 0 for _, moving in in_zone),
                "activities": len(in_zone),
                "percentage": 0,
            }
        )

    total_time = sum(zone["totalTime"] for zone in zones)
    for zone in zones:
        if total_time > 0:
            zone["percentage"] = round_half_up(zone["totalTime"] / total_time * 100)
    return zones


def get_hr_zones(
    session: Session,
    user_id: int,
    *,
    year: Optional[int] = None,
    max_hr: int = DEFAULT_MAX_HR,
) -> Dict[str, Any]:
    start, end = year_bounds(year) if year else (None, None)
    clauses = [
        *_filters(user_id, start=start, end=end),
        Activity.average_heartrate.is_not(None),
        Activity.average_heartrate > 0,
    ]

    samples = session.exec(
        select(Activity.average_heartrate, Activity.moving_time).where(*clauses)
    ).all()
    pairs = session.exec(
        select(Activity.id, Activity.average_heartrate, Activity.pace)
        .where(*clauses, Activity.pace.is_not(None), Activity.pace > 0)
        .limit(100)
    ).all()

    return {
        "zones": zone_breakdown(list(samples), max_hr),
        "totalActivitiesWithHR": len(samples),
        "hrTrend": _monthly(
            session,
            clauses,
            avg_hr=func.avg(Activity.average_heartrate),
            max_hr=func.max(Activity.max_heartrate),
            avg_pace=func.avg(Activity.pace),
            activities=func.count(Activity.id),
        ),
        "hrPaceCorrelation": [
            {"id": activity_id, "average_heartrate": hr, "pace": pace}
            for activity_id, hr, pace in pairs
        ],
        "maxHRUsed": max_hr,
    }


def get_locations(
    session: Session, user_id: int, *, year: Optional[int] = None
) -> Dict[str, Any]:
    start, end = year_bounds(year) if year else (None, None)
    activities = [
        activity
        for activity in session.exec(
            select(Activity)
            .where(*_filters(user_id, start=start, end=end), Activity.start_latlng.is_not(None))
            .order_by(Activity.start_date)
        ).all()
        if activity.start_latlng and len(activity.start_latlng) == 2
    ]

    timezone_counts: Counter = Counter()
    timezone_distance: Dict[str, float] = {}
    grid_cells = set()
    start_points: Counter = Counter()
    heatmap = []
    for activity in activities:
        lat, lng = activity.start_latlng
        if activity.timezone:
            timezone_counts[activity.timezone] += 1
            timezone_distance[activity.timezone] = (
                timezone_distance.get(activity.timezone, 0) + (activity.distance or 0)
            )
        grid_cells.add((round_half_up(lat * 100), round_half_up(lng * 100)))
        start_points[(f"{lat:.3f}", f"{lng:.3f}")] += 1
        heatmap.append(
            {"lat": lat, "lng": lng, "weight": min(1, (activity.distance or 0) / 10000)}
        )

    return {
        "totalActivitiesWithLocation": len(activities),
        "uniqueLocations": len(grid_cells),
        "timezones": [
            {"_id": name, "count": count, "distance": timezone_distance[name]}
            for name, count in timezone_counts.most_common(10)
        ],
        "heatmapData": heatmap[:1000],
        "mostFrequentStarts": [
            {"lat": float(lat), "lng": float(lng), "count": count}
            for (lat, lng), count in start_points.most_common(5)
        ],
    }


_YEAR_DEFAULTS = {
    "total_distance": 0,
    "total_time": 0,
    "total_elevation": 0,
    "total_activities": 0,
    "total_kudos": 0,
    "avg_pace": 0,
}


def _year_stats(session: Session, user_id: int, year: int) -> Dict[str, Any]:
    start, end = year_bounds(year)
    return _aggregate(
        session,
        _filters(user_id, start=start, end=end),
        _YEAR_DEFAULTS,
        total_distance=_sum(Activity.distance),
        total_time=_sum(Activity.moving_time),
        total_elevation=_sum(Activity.total_elevation_gain),
        total_activities=func.count(Activity.id),
        total_kudos=_sum(Activity.kudos_count),
        avg_pace=func.avg(Activity.pace),
    )


def get_comparisons(
    session: Session, user_id: int, *, now: Optional[datetime] = None
) -> Dict[str, Any]:
    current_year = _now(now).year
    previous_year = current_year - 1
    this_year = _year_stats(session, user_id, current_year)
    last_year = _year_stats(session, user_id, previous_year)

    metrics = {
        "distance": "total_distance",
        "time": "total_time",
        "activities": "total_activities",
        "elevation": "total_elevation",
        "kudos": "total_kudos",
    }
    comparison = {
        name: {
            "current": this_year[field],
            "previous": last_year[field],
            "change": percent_change(this_year[field], last_year[field]),
        }
        for name, field in metrics.items()
    }
    return {
        "currentYear": current_year,
        "previousYear": previous_year,
        "thisYear": this_year,
        "lastYear": last_year,
        "comparison": comparison,
    }


__all__ = [
    "acute_chronic_ratio",
    "classify_training_status",
    "consistency_score",
    "current_streak",
    "get_comparisons",
    "get_consistency",
    "get_hr_zones",
    "get_kudos_analysis",
    "get_locations",
    "get_pace_analysis",
    "get_personal_bests",
    "get_rolling_stats",
    "get_summary",
    "get_training_load",
    "get_trends",
    "get_year_in_sport",
    "list_activities",
    "longest_streak",
    "pace_distribution",
    "percent_change",
    "zone_breakdown",
]
