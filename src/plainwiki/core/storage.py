"""Storage abstraction for wiki pages."""

import os
from abc import ABC, abstractmethod
from pathlib import Path

from plainwiki.core.models import Page
from plainwiki.core.validation import TitleValidator


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def get_page(self, title: str) -> Page | None:
        """Get a page by title. Returns None if it cannot be read."""
        ...

    @abstractmethod
    async def save_page(self, title: str, body: bytes) -> Page:
        """Save a page. Creates it if it doesn't exist."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Each page lives in its own file, ``<title>.txt``, holding the raw body
    bytes. New files are readable and writable by the owner only.

    There is no locking: concurrent saves of one title race on the
    filesystem and the last writer wins. Writes are not atomic either, so a
    crash mid-write can leave a truncated file behind.
    """

    FILE_MODE = 0o600

    def __init__(self, base_path: Path, validator: TitleValidator | None = None):
        self.base_path = base_path
        self.validator = validator or TitleValidator()

    def _title_to_filename(self, title: str) -> str:
        """Convert page title to filename."""
        return title + ".txt"

    def _get_path(self, title: str) -> Path:
        """Get full path for a page.

        Raises ValueError for titles that could name a file outside
        base_path.
        """
        if not self.validator.is_valid(title):
            raise ValueError(f"Invalid Page Title: {title!r}")
        return self.base_path / self._title_to_filename(title)

    def _opener(self, path: str, flags: int) -> int:
        return os.open(path, flags, self.FILE_MODE)

    async def get_page(self, title: str) -> Page | None:
        """Get a page by title."""
        try:
            body = self._get_path(title).read_bytes()
        except OSError:
            return None
        return Page(title=title, body=body)

    async def save_page(self, title: str, body: bytes) -> Page:
        """Save a page, truncating any previous content.

        Raises OSError if the file cannot be written, ValueError if the
        title is not a valid page title.
        """
        page = Page(title=title, body=body)
        with open(self._get_path(title), "wb", opener=self._opener) as f:
            f.write(page.body)
        return page
