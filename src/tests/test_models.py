"""Tests for the Page model."""

import pytest
from pydantic import ValidationError

from plainwiki.core.models import Page


class TestPage:
    def test_defaults_to_empty_body(self):
        page = Page(title="newpage")
        assert page.body == b""
        assert page.text == ""

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Page(title="")

    @pytest.mark.parametrize("title", ["../x", "a.b", "with space", "abc\n"])
    def test_title_must_be_letters_and_digits(self, title):
        with pytest.raises(ValidationError):
            Page(title=title)

    def test_title_is_immutable(self):
        page = Page(title="Fixed", body=b"x")
        with pytest.raises(ValidationError):
            page.title = "Other"

    def test_text_decodes_utf8(self):
        assert Page(title="p", body="café".encode()).text == "café"

    def test_text_replaces_undecodable_bytes(self):
        assert Page(title="p", body=b"ok\xff").text == "ok�"
