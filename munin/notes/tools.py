"""Note parsing and loading.

This module turns markdown files with YAML frontmatter into ``Note``
records. It is read-only: persistence and sync belong to the storage layer,
which hands Munin a plain collection of notes.

Example:
    notes = await load_notes(VaultClient(vault_path=Path("vault")))
    results = search(notes, "tag:recipe cake")
"""

from collections.abc import Mapping
from typing import Any

import frontmatter
from fastapi import Depends
from pydantic import ValidationError

from munin.dependencies import (
    InvalidInputError,
    VaultClient,
    VaultError,
    get_vault_client,
    logger,
)
from munin.models import http_error
from munin.notes.models import Note, NoteContent, NoteFrontmatter


def get_folder_from_path(path: str) -> str | None:
    """Extract the folder label from a vault-relative file path.

    Args:
        path: File path (e.g., "Projects/API/design.md")

    Returns:
        Folder path, or None for root-level files

    Examples:
        >>> get_folder_from_path("Projects/API/design.md")
        'Projects/API'
        >>> get_folder_from_path("note.md") is None
        True
    """
    if "/" not in path:
        return None
    return path.rsplit("/", 1)[0]


def extract_title(content: str, path: str) -> str:
    """Extract note title from content or path.

    Attempts to find an H1 heading (# Title) in the content.
    Falls back to the filename without extension.

    Examples:
        >>> extract_title("# My Note\\nContent", "notes/my-note.md")
        'My Note'
        >>> extract_title("No heading here", "notes/my-note.md")
        'my-note'
    """
    for line in content.split("\n"):
        line = line.strip()
        if line.startswith("# "):
            return line[2:].strip()

    filename = path.rsplit("/", 1)[-1]
    return filename.rsplit(".", 1)[0]


def parse_note(content: str) -> NoteContent:
    """Parse note content into frontmatter and body.

    Uses python-frontmatter to separate YAML frontmatter from the
    markdown body. Content without a frontmatter block, or with one that
    does not parse, is returned as a plain body.

    Args:
        content: Raw note content (may or may not have frontmatter)

    Returns:
        NoteContent with parsed frontmatter (if present) and body
    """
    try:
        post = frontmatter.loads(content)
    except Exception as e:
        logger.debug("frontmatter_parse_error", extra={"error": str(e)})
        return NoteContent(frontmatter=None, body=content, raw=content)

    fm_data = dict(post.metadata) if post.metadata else None
    if not fm_data:
        return NoteContent(frontmatter=None, body=post.content, raw=content)

    try:
        fm = NoteFrontmatter.model_validate(fm_data)
    except ValidationError as e:
        logger.debug("frontmatter_validation_error", extra={"error": str(e)})
        fm = None

    return NoteContent(frontmatter=fm, body=post.content, raw=content)


def validate_note(data: Note | Mapping[str, Any]) -> Note:
    """Coerce a mapping into a ``Note``, failing fast on malformed data.

    Args:
        data: A Note (returned unchanged) or a mapping of note fields

    Returns:
        A validated Note

    Raises:
        InvalidInputError: If a required field is missing or has the wrong shape
    """
    if isinstance(data, Note):
        return data
    try:
        return Note.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid note data: {e}") from e


def note_from_markdown(path: str, content: str, **defaults: Any) -> Note:
    """Build a ``Note`` from a vault file.

    Missing frontmatter keys fall back to values derived from the file:
    the id is the path without ``.md``, the title is the first H1 or the
    filename, and the folder is the parent directory. ``defaults`` supplies
    timestamps for files that carry none.

    Args:
        path: Vault-relative path of the file
        content: Raw file content
        **defaults: Fallback field values (typically ``created``/``modified``)

    Returns:
        A validated Note

    Raises:
        InvalidInputError: If the resulting fields do not form a valid note
    """
    parsed = parse_note(content)
    fm = parsed.frontmatter or NoteFrontmatter()

    created = fm.created or fm.modified or defaults.get("created")
    modified = fm.modified or fm.created or defaults.get("modified")

    data: dict[str, Any] = {
        "id": fm.id if fm.id is not None else path.rsplit(".md", 1)[0],
        "title": fm.title or extract_title(parsed.body, path),
        "content": parsed.body,
        "folder": fm.folder if fm.folder is not None else get_folder_from_path(path),
        "tags": fm.tags,
        "servings": fm.servings,
    }
    if created is not None:
        data["created"] = created
    if modified is not None:
        data["modified"] = modified

    return validate_note(data)


async def load_notes(vault: VaultClient, folder: str = "") -> list[Note]:
    """Load every markdown note in the vault.

    Files that cannot be read or do not form a valid note are skipped and
    logged; one bad file never hides the rest of the collection.

    Args:
        vault: Client for the vault directory
        folder: Optional folder to limit loading

    Returns:
        Notes in path order
    """
    notes: list[Note] = []
    files = await vault.list_files(folder=folder)

    for file_path in files:
        try:
            content = await vault.read_file(file_path)
            mtime = await vault.modified_time(file_path)
            notes.append(note_from_markdown(file_path, content, created=mtime, modified=mtime))
        except (InvalidInputError, VaultError, UnicodeDecodeError) as e:
            logger.debug("load_notes_file_error", extra={"path": file_path, "error": str(e)})
            continue

    logger.info("notes_loaded", extra={"note_count": len(notes), "files_scanned": len(files)})
    return notes


async def get_notes(vault: VaultClient = Depends(get_vault_client)) -> list[Note]:
    """FastAPI dependency: the vault's notes, loaded fresh for each request.

    Raises:
        HTTPException: 500 if the vault directory cannot be read
    """
    try:
        return await load_notes(vault)
    except VaultError as e:
        logger.error(
            "load_notes_failed",
            extra={"vault_path": str(vault.vault_path), "error": str(e)},
        )
        raise http_error(f"Vault error: {e!s}", "vault_error") from e
