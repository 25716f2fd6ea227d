"""Shared pytest fixtures."""

import os
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

# Load environment variables before importing app modules
load_dotenv()

# Set test defaults if not provided
if not os.environ.get("VAULT_PATH"):
    os.environ["VAULT_PATH"] = "/tmp/test-vault"

from fastapi.testclient import TestClient  # noqa: E402

from munin.dependencies import VaultClient, get_vault_client  # noqa: E402
from munin.main import app  # noqa: E402
from munin.notes.models import Note  # noqa: E402

# A Monday; every fixed-clock test measures from here
NOW = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for date-dependent tests."""
    return NOW


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """Factory for notes with sensible defaults.

    ``days_ago`` sets both timestamps relative to ``NOW``; pass ``created``
    or ``modified`` explicitly to override either one.
    """

    def _make(note_id: int | str, title: str, content: str = "", **fields: Any) -> Note:
        days_ago = fields.pop("days_ago", 0)
        stamp = NOW - timedelta(days=days_ago)
        fields.setdefault("created", stamp)
        fields.setdefault("modified", stamp)
        return Note(id=note_id, title=title, content=content, **fields)

    return _make


@pytest.fixture
def sample_notes(make_note: Callable[..., Note]) -> list[Note]:
    """A small linked collection across two folders and the root."""
    return [
        make_note(
            1,
            "Chocolate Cake",
            "Rich chocolate cake with cocoa and butter. See [[Brownies]].",
            folder="Recipes",
            tags=["recipe", "dessert"],
            days_ago=1,
        ),
        make_note(
            2,
            "Brownies",
            "Fudgy brownies with walnuts. Links back to [Cake](app://note/1).",
            folder="Recipes",
            tags=["recipe", "dessert", "baking"],
            days_ago=2,
        ),
        make_note(
            3,
            "Weekly Meeting",
            "Discussed the API roadmap and hiring.",
            folder="Work",
            tags=["meeting"],
            days_ago=10,
        ),
        make_note(
            "journal-1",
            "Journal",
            "Baked a cake today. [[Weekly Meeting]] went long. [[Missing Note]]",
        ),
    ]


@pytest.fixture
def mock_vault_path(tmp_path: Path) -> Path:
    """Create a temporary vault with notes in a folder and at the root."""
    vault = tmp_path / "vault"
    (vault / "Recipes").mkdir(parents=True)
    (vault / "Recipes" / "cake.md").write_text(
        """---
id: 1
title: Chocolate Cake
tags: [recipe, dessert]
created: 2025-03-01T09:00:00+00:00
modified: 2025-03-09T09:00:00+00:00
servings: 8
---
Rich chocolate cake. See [[Brownies]].
""",
        encoding="utf-8",
    )
    (vault / "Recipes" / "brownies.md").write_text(
        """---
id: 2
tags: recipe, baking
created: 2025-03-02
---
# Brownies

Fudgy brownies. Back to [Cake](app://note/1).
""",
        encoding="utf-8",
    )
    (vault / "inbox.md").write_text("Just a loose thought about cake.\n", encoding="utf-8")
    return vault


@pytest.fixture
def mock_vault_client(mock_vault_path: Path) -> VaultClient:
    """Create a VaultClient with temporary vault path."""
    return VaultClient(vault_path=mock_vault_path)


@pytest.fixture
def client(mock_vault_client: VaultClient) -> Iterator[TestClient]:
    """Create a FastAPI test client reading from the temporary vault."""

    async def _override() -> Any:
        yield mock_vault_client

    app.dependency_overrides[get_vault_client] = _override
    yield TestClient(app)
    app.dependency_overrides.clear()
