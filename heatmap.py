import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, Optional

import config
from collect import CodeforcesClient, default_client
from errors import CodeforcesError
from structs import HeatmapStats, Submission
from utils import local_date, parse_iso_date, shift_months

logger = logging.getLogger(__name__)

ROLLING_WINDOW = timedelta(days=365)


def build_heatmap(submissions: Iterable[Submission], year: Optional[int] = None,
                  now: Optional[datetime] = None, tz=None) -> Dict[str, int]:
    """Accepted submissions per local calendar day.

    With `year` only that calendar year is counted, otherwise the 365 days
    ending at `now`.
    """
    tz = tz or config.TIMEZONE
    now = now or datetime.now(tz)
    window_end = now.timestamp()
    window_start = (now - ROLLING_WINDOW).timestamp()

    freq_days: Dict[str, int] = dict()
    for submission in submissions:
        if not submission.accepted:
            continue
        ts = submission.creationTimeSeconds
        day = local_date(ts, tz)
        if year is not None:
            if day.year != year:
                continue
        elif not (window_start <= ts <= window_end):
            continue
        key = day.isoformat()
        if key not in freq_days:
            freq_days[key] = 0
        freq_days[key] += 1
    return freq_days

def get_submission_heatmap_data(handle: str, year: Optional[int] = None,
                                client: Optional[CodeforcesClient] = None,
                                now: Optional[datetime] = None) -> Dict[str, int]:
    client = client or default_client()
    try:
        submissions = client.get_user_submissions(handle)
    except CodeforcesError as e:
        logger.warning("Failed to get heatmap data for %s: %s", handle, e)
        return {}
    return build_heatmap(submissions, year=year, now=now)


def filter_year(heatmap: Dict[str, int], year: int) -> Dict[str, int]:
    result = {}
    for key, count in heatmap.items():
        day = parse_iso_date(key)
        if day is not None and day.year == year:
            result[key] = count
    return result

def intensity(count: int, max_count: int) -> int:
    """Shade level 0-4, by quartile of the busiest day."""
    max_count = max(max_count, 1)
    if count <= 0:
        return 0
    if count <= max_count * 0.25:
        return 1
    if count <= max_count * 0.5:
        return 2
    if count <= max_count * 0.75:
        return 3
    return 4


def heatmap_stats(heatmap: Dict[str, int], today: Optional[date] = None) -> HeatmapStats:
    today = today or datetime.now(config.TIMEZONE).date()
    one_year_ago = shift_months(today, -12)
    one_month_ago = shift_months(today, -1)
    stats = HeatmapStats()

    days = []
    for key, count in heatmap.items():
        day = parse_iso_date(key)
        if day is None:
            logger.debug("Skipping unparseable heatmap key %r", key)
            continue
        days.append((day, count))
    days.sort()

    streak = year_streak = month_streak = 0
    previous: Optional[date] = None
    for day, count in days:
        stats.all_time_total += count
        in_year = one_year_ago <= day <= today
        in_month = one_month_ago <= day <= today
        if in_year:
            stats.last_year_total += count
        if in_month:
            stats.last_month_total += count

        if count <= 0:
            streak = year_streak = month_streak = 0
            previous = None
            continue

        # a missing calendar day breaks the run
        if previous is None or day - previous != timedelta(days=1):
            streak = year_streak = month_streak = 0
        previous = day

        streak += 1
        stats.max_streak = max(stats.max_streak, streak)
        year_streak = year_streak + 1 if in_year else 0
        stats.year_streak = max(stats.year_streak, year_streak)
        month_streak = month_streak + 1 if in_month else 0
        stats.month_streak = max(stats.month_streak, month_streak)

    return stats
