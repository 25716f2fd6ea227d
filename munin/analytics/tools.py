"""Note collection analytics.

This module computes the statistics shown on the analytics dashboard:
totals, folder and tag breakdowns, note highlights (oldest, newest,
longest, shortest), recent activity windows and the writing streak.

All dates are bucketed by UTC calendar day. Pass ``now`` to pin the clock;
it defaults to the current time.

Example usage:
    snapshot = compute_analytics(notes)
    snapshot.writing_streak
    export_analytics(snapshot)
"""

import json
import math
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta

from munin.analytics.models import (
    AnalyticsSnapshot,
    DayActivity,
    FolderRanking,
    FolderStats,
    TagStats,
)
from munin.dependencies import logger
from munin.notes.models import Note

UNCATEGORIZED = "Uncategorized"
TOP_TAG_LIMIT = 10
RECENT_ACTIVITY_DAYS = 7
MAX_STREAK_DAYS = 365

# Fixed English names so output does not depend on the process locale
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


# =============================================================================
# Helper Functions
# =============================================================================


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Make datetime timezone-aware (UTC).

    Examples:
        >>> ensure_utc(None) is None
        True
        >>> ensure_utc(datetime(2025, 1, 1)).tzinfo is not None
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def count_words(text: str | None) -> int:
    """Count whitespace-delimited words.

    Examples:
        >>> count_words("  hello   world ")
        2
        >>> count_words("")
        0
    """
    if not text:
        return 0
    return len(text.split())


def day_key(moment: datetime | date) -> str:
    """UTC calendar day of a timestamp as ``YYYY-MM-DD``."""
    if isinstance(moment, datetime):
        return moment.astimezone(UTC).date().isoformat()
    return moment.isoformat()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round`` rounds halves to even, which would report 2 for 2.5.

    Examples:
        >>> round_half_up(2.5)
        3
    """
    return math.floor(value + 0.5)


def calculate_writing_streak(activity_by_day: dict[str, int], today: date) -> int:
    """Count consecutive active days ending today, or yesterday if today is idle.

    Args:
        activity_by_day: Modification counts keyed by ``YYYY-MM-DD``
        today: Current UTC date

    Returns:
        Streak length in days, at most 365

    Examples:
        >>> calculate_writing_streak({"2025-03-09": 1, "2025-03-10": 2}, date(2025, 3, 10))
        2
        >>> calculate_writing_streak({"2025-03-09": 1}, date(2025, 3, 10))
        1
    """
    yesterday = today - timedelta(days=1)
    if activity_by_day.get(day_key(today)):
        check = today
    elif activity_by_day.get(day_key(yesterday)):
        check = yesterday
    else:
        return 0

    streak = 0
    for _ in range(MAX_STREAK_DAYS):
        if not activity_by_day.get(day_key(check)):
            break
        streak += 1
        check -= timedelta(days=1)
    return streak


def get_recent_activity(
    activity_by_day: dict[str, int],
    today: date,
    days: int = RECENT_ACTIVITY_DAYS,
) -> list[DayActivity]:
    """Per-day counts for the last ``days`` days including today, oldest first."""
    activity = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = day_key(day)
        activity.append(
            DayActivity(
                date=key,
                day=WEEKDAY_NAMES[day.weekday()],
                count=activity_by_day.get(key, 0),
            )
        )
    return activity


# =============================================================================
# Public API
# =============================================================================


def compute_analytics(
    notes: Sequence[Note] | None,
    now: datetime | None = None,
) -> AnalyticsSnapshot:
    """Aggregate statistics over a note collection in a single pass.

    Args:
        notes: Note collection; None or empty yields the zero snapshot
        now: Reference time for the week/month windows and the streak

    Returns:
        AnalyticsSnapshot with every statistic filled in

    Examples:
        >>> compute_analytics([]).total_notes
        0
    """
    if not notes:
        return AnalyticsSnapshot()

    now = ensure_utc(now) or datetime.now(UTC)
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)

    snapshot = AnalyticsSnapshot(total_notes=len(notes))
    folders: dict[str, FolderStats] = {}
    tags: Counter[str] = Counter()
    activity: Counter[str] = Counter()
    longest_words = 0
    shortest_words: int | None = None

    for note in notes:
        words = count_words(note.content)
        snapshot.total_words += words
        snapshot.total_characters += len(note.content)

        stats = folders.setdefault(note.folder or UNCATEGORIZED, FolderStats())
        stats.count += 1
        stats.words += words

        tags.update(note.tags)

        if snapshot.oldest_note is None or note.created < snapshot.oldest_note.created:
            snapshot.oldest_note = note
        if snapshot.newest_note is None or note.modified > snapshot.newest_note.modified:
            snapshot.newest_note = note

        if words > longest_words:
            longest_words = words
            snapshot.longest_note = note
        if words > 0 and (shortest_words is None or words < shortest_words):
            shortest_words = words
            snapshot.shortest_note = note

        if note.modified >= week_ago:
            snapshot.notes_this_week += 1
        if note.modified >= month_ago:
            snapshot.notes_this_month += 1

        activity[day_key(note.modified)] += 1

    snapshot.folders = folders
    snapshot.tags = dict(tags)
    snapshot.activity_by_day = dict(activity)
    snapshot.average_note_length = round_half_up(snapshot.total_words / len(notes))
    snapshot.top_tags = [
        TagStats(tag=tag, count=count) for tag, count in tags.most_common(TOP_TAG_LIMIT)
    ]
    snapshot.top_folders = [
        FolderRanking(folder=name, count=stats.count, words=stats.words)
        for name, stats in sorted(folders.items(), key=lambda item: item[1].count, reverse=True)
    ]

    today = now.astimezone(UTC).date()
    snapshot.writing_streak = calculate_writing_streak(snapshot.activity_by_day, today)
    snapshot.recent_activity = get_recent_activity(snapshot.activity_by_day, today)

    logger.info(
        "analytics_computed",
        extra={
            "total_notes": snapshot.total_notes,
            "total_words": snapshot.total_words,
            "folder_count": len(folders),
            "tag_count": len(tags),
            "writing_streak": snapshot.writing_streak,
        },
    )

    return snapshot


def export_analytics(snapshot: AnalyticsSnapshot, now: datetime | None = None) -> str:
    """Serialize a snapshot as pretty-printed JSON with a ``generated_at`` stamp.

    Examples:
        >>> json.loads(export_analytics(AnalyticsSnapshot()))["total_notes"]
        0
    """
    generated_at = ensure_utc(now) or datetime.now(UTC)
    document = {"generated_at": generated_at.isoformat(), **snapshot.model_dump(mode="json")}
    return json.dumps(document, indent=2)
