"""Pydantic models for notes.

``Note`` is the record every core component consumes. It is owned by the
persistence layer; nothing in Munin mutates one after construction.
"""

from datetime import UTC, date, datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Note(BaseModel):
    """A single note in the collection.

    Attributes:
        id: Opaque identifier, numeric or string, stable for the note's lifetime
        title: Display title (non-empty)
        content: Markdown source
        folder: Single category label, None when uncategorized
        tags: Tag labels; order and duplicates are not meaningful
        created: Creation timestamp
        modified: Last modification timestamp (never before ``created``)
        servings: Optional recipe field, unused by search and linking
    """

    model_config = ConfigDict(frozen=True)

    id: int | str = Field(..., description="Stable note identifier")
    title: str = Field(..., min_length=1, description="Note title")
    content: str = Field(..., description="Markdown content")
    folder: str | None = Field(default=None, description="Folder label")
    tags: list[str] = Field(default_factory=list, description="Tag labels")
    created: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the note was created",
    )
    modified: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the note was last modified",
    )
    servings: float | None = Field(default=None, description="Recipe servings")

    @field_validator("created", "modified")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC so every comparison is well defined."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @model_validator(mode="after")
    def check_chronology(self) -> "Note":
        """Reject notes modified before they were created."""
        if self.modified < self.created:
            raise ValueError("modified must not be earlier than created")
        return self

    @property
    def key(self) -> str:
        """String form of ``id`` used for every id-keyed lookup."""
        return str(self.id)


class NoteFrontmatter(BaseModel):
    """YAML frontmatter metadata for a note file.

    Every field is optional; the loader fills in defaults from the file path
    and body when a key is absent.

    Example frontmatter:
        ---
        id: 42
        title: Chocolate Cake
        folder: Recipes
        created: 2025-11-25T10:30:00+00:00
        modified: 2025-11-25T14:45:00+00:00
        tags:
          - recipe
          - dessert
        servings: 8
        ---
    """

    id: int | str | None = None
    title: str | None = None
    folder: str | None = None
    created: datetime | None = None
    modified: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    servings: float | None = None

    @field_validator("created", "modified", mode="before")
    @classmethod
    def widen_dates(cls, v: Any) -> Any:
        """YAML loads ``2025-01-01`` as a date; promote it to UTC midnight."""
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min, tzinfo=UTC)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        """Accept ``tags: a, b`` as well as a YAML list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        return v


class NoteContent(BaseModel):
    """Parsed note with frontmatter and body separated.

    Attributes:
        frontmatter: Parsed frontmatter metadata (None if no frontmatter)
        body: The markdown content after the frontmatter
        raw: The original unparsed content
    """

    frontmatter: NoteFrontmatter | None = None
    body: str = ""
    raw: str = ""
