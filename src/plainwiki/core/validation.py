"""Page title validation."""

import re

DEFAULT_TITLE_PATTERN = r"[a-zA-Z0-9]+"


class TitleValidator:
    """Accepts titles made only of ASCII letters and digits."""

    def __init__(self, pattern: str = DEFAULT_TITLE_PATTERN):
        self._pattern = re.compile(pattern)

    def is_valid(self, title: str) -> bool:
        # fullmatch, so "abc\n" is rejected as well
        return self._pattern.fullmatch(title) is not None
