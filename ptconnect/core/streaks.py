"""
Streak and weekly-goal statistics over a client's session timestamps.

Everything is evaluated on UTC calendar dates at query time: a run that ended
yesterday is not a current streak.
"""

from datetime import datetime, timedelta

from ptconnect.core.records import StreakStats, WeeklyGoalStats
from ptconnect.utils.timeutils import to_utc_naive, utcnow


def _distinct_dates(session_dates):
    return sorted({to_utc_naive(value).date() for value in session_dates})


def compute_streak(session_dates, now=None) -> StreakStats:
    session_dates = list(session_dates)
    if not session_dates:
        return StreakStats()

    today = to_utc_naive(now or utcnow()).date()
    dates = _distinct_dates(session_dates)

    longest = 0
    running = 0
    previous = None
    for current in dates:
        if previous is not None and (current - previous).days == 1:
            running += 1
        else:
            running = 1
        longest = max(longest, running)
        previous = current

    current_streak = 0
    if dates[-1] == today:
        present = set(dates)
        day = today
        while day in present:
            current_streak += 1
            day -= timedelta(days=1)

    return StreakStats(
        current_streak=current_streak,
        longest_streak=longest,
        last_workout_date=dates[-1].isoformat(),
        total_workouts=len(session_dates),
    )


def start_of_week(now) -> datetime:
    """Monday 00:00:00 UTC of the week containing ``now``."""
    now = to_utc_naive(now)
    midnight = datetime(now.year, now.month, now.day)
    return midnight - timedelta(days=midnight.weekday())


def compute_weekly_goal(goal, session_dates, routine_count, now) -> WeeklyGoalStats:
    week_start = start_of_week(now)
    week_end = week_start + timedelta(days=7)

    completed = 0
    for value in session_dates:
        performed = to_utc_naive(value)
        if week_start <= performed < week_end:
            completed += 1

    return WeeklyGoalStats(
        goal=goal if goal and goal > 0 else routine_count,
        completed=completed,
        week_start=week_start,
    )
