"""Pydantic models for analytics results.

This module defines the snapshot returned by ``compute_analytics`` and the
small records it is built from.
"""

from pydantic import BaseModel, Field

from munin.notes.models import Note


class FolderStats(BaseModel):
    """Note and word totals for one folder.

    Attributes:
        count: Number of notes in the folder
        words: Total words across those notes
    """

    count: int = Field(default=0, ge=0, description="Number of notes")
    words: int = Field(default=0, ge=0, description="Total words")


class FolderRanking(FolderStats):
    """A folder's totals, tagged with its name for ranked lists."""

    folder: str = Field(..., description="Folder label")


class TagStats(BaseModel):
    """Usage count for a single tag.

    Attributes:
        tag: Tag label, as written on the notes
        count: Number of occurrences across all notes
    """

    tag: str = Field(..., description="Tag label")
    count: int = Field(default=0, ge=0, description="Usage count")


class DayActivity(BaseModel):
    """Modification count for a single day.

    Attributes:
        date: Date in YYYY-MM-DD format (UTC)
        day: Short English weekday name, e.g. "Mon"
        count: Notes last modified on this day
    """

    date: str = Field(..., description="Date in YYYY-MM-DD format")
    day: str = Field(..., description="Short weekday name")
    count: int = Field(default=0, ge=0, description="Notes modified")


class AnalyticsSnapshot(BaseModel):
    """Aggregate statistics over a note collection.

    Every field is computed in one pass; an empty collection produces the
    zero snapshot (all counts 0, all notes None, all collections empty).

    Attributes:
        total_notes: Number of notes
        total_words: Sum of whitespace-delimited words over all contents
        total_characters: Sum of content lengths
        folders: Per-folder totals; notes without a folder count as "Uncategorized"
        tags: Per-tag occurrence counts
        oldest_note: Note with the earliest ``created``
        newest_note: Note with the latest ``modified``
        longest_note: Note with the most words
        shortest_note: Note with the fewest words, ignoring empty notes
        average_note_length: Mean words per note, rounded half up
        notes_this_week: Notes modified within the last 7 days
        notes_this_month: Notes modified within the last 30 days
        top_tags: The 10 most used tags, descending
        top_folders: All folders by note count, descending
        activity_by_day: Modification counts keyed by UTC date
        writing_streak: Consecutive active days ending today or yesterday
        recent_activity: Per-day counts for the last 7 days, oldest first
    """

    total_notes: int = Field(default=0, ge=0)
    total_words: int = Field(default=0, ge=0)
    total_characters: int = Field(default=0, ge=0)
    folders: dict[str, FolderStats] = Field(default_factory=dict)
    tags: dict[str, int] = Field(default_factory=dict)
    oldest_note: Note | None = None
    newest_note: Note | None = None
    longest_note: Note | None = None
    shortest_note: Note | None = None
    average_note_length: int = Field(default=0, ge=0)
    notes_this_week: int = Field(default=0, ge=0)
    notes_this_month: int = Field(default=0, ge=0)
    top_tags: list[TagStats] = Field(default_factory=list)
    top_folders: list[FolderRanking] = Field(default_factory=list)
    activity_by_day: dict[str, int] = Field(default_factory=dict)
    writing_streak: int = Field(default=0, ge=0)
    recent_activity: list[DayActivity] = Field(default_factory=list)
