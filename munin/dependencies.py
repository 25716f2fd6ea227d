"""Shared dependencies: structured logger, error types and the VaultClient."""

import json
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from munin.config import get_settings

# Attributes present on every LogRecord; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                data[key] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def setup_logging() -> logging.Logger:
    """Configure and return the application logger."""
    settings = get_settings()
    logger = logging.getLogger("munin")
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


logger = setup_logging()


class MuninError(Exception):
    """Base exception for Munin."""

    pass


class InvalidInputError(MuninError):
    """Raised when note data does not conform to the note model.

    This signals a programmer error in the calling layer, not a bad search.
    """

    pass


class NoteNotFoundError(MuninError):
    """Raised when a note id does not exist in the collection."""

    pass


class VaultError(MuninError):
    """Base exception for vault operations."""

    pass


class VaultNotFoundError(VaultError):
    """Raised when a file is not found in the vault."""

    pass


class VaultSecurityError(VaultError):
    """Raised when a security violation is detected."""

    pass


@dataclass
class VaultClient:
    """Read-only client for a directory of markdown notes."""

    vault_path: Path

    def _validate_path(self, relative_path: str) -> Path:
        """Validate and resolve a path within the vault.

        Args:
            relative_path: Relative path within the vault

        Returns:
            Resolved absolute path

        Raises:
            VaultSecurityError: If path traversal is detected
        """
        full_path = (self.vault_path / relative_path).resolve()
        if not full_path.is_relative_to(self.vault_path.resolve()):
            raise VaultSecurityError(f"Path traversal detected: {relative_path}")
        return full_path

    async def read_file(self, path: str) -> str:
        """Read a file from the vault.

        Args:
            path: Relative path to file

        Returns:
            File content as string

        Raises:
            VaultNotFoundError: If file does not exist
        """
        full_path = self._validate_path(path)
        if not full_path.exists():
            raise VaultNotFoundError(f"File not found: {path}")
        return full_path.read_text(encoding="utf-8")

    async def modified_time(self, path: str) -> datetime:
        """Return the file's last modification time (UTC).

        Raises:
            VaultNotFoundError: If file does not exist
        """
        full_path = self._validate_path(path)
        if not full_path.exists():
            raise VaultNotFoundError(f"File not found: {path}")
        return datetime.fromtimestamp(full_path.stat().st_mtime, tz=UTC)

    async def list_files(self, folder: str = "", pattern: str = "*.md") -> list[str]:
        """List files in the vault matching a pattern.

        Paths always use forward slashes so they can double as note ids.

        Args:
            folder: Folder to search in (empty for root)
            pattern: Glob pattern for files

        Returns:
            List of relative file paths
        """
        root = self.vault_path.resolve()
        base = self._validate_path(folder) if folder else root
        if not base.exists():
            raise VaultNotFoundError(f"Vault folder not found: {folder or self.vault_path}")
        return sorted(f.relative_to(root).as_posix() for f in base.rglob(pattern) if f.is_file())


async def get_vault_client() -> AsyncIterator[VaultClient]:
    """FastAPI dependency provider for VaultClient."""
    yield VaultClient(vault_path=get_settings().vault_path)
