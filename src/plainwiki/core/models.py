"""Data models for plainwiki."""

from pydantic import BaseModel, ConfigDict, Field

from plainwiki.core.validation import DEFAULT_TITLE_PATTERN


class Page(BaseModel):
    """A wiki page: a title and the raw bytes stored under it."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(pattern=f"^{DEFAULT_TITLE_PATTERN}$")
    body: bytes = b""

    @property
    def text(self) -> str:
        """Body decoded for display; undecodable bytes are replaced.

        The edit form shows this text, so saving a page whose file is not
        valid UTF-8 through the form stores U+FFFD in place of those bytes.
        """
        return self.body.decode("utf-8", errors="replace")
