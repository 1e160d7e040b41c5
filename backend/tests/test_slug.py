import re

import pytest

from feedback_wall.core.slug import derive_slug


class TestDeriveSlug:
    def test_title_with_punctuation(self):
        assert derive_slug("My Cool Page!") == "my-cool-page"

    def test_whitespace_and_hyphen_runs(self):
        assert derive_slug("  multiple   spaces -- here ") == "multiple-spaces-here"

    def test_keeps_digits_and_existing_hyphens(self):
        assert derive_slug("Q3-2026 Retro") == "q3-2026-retro"

    def test_drops_non_ascii_letters(self):
        assert derive_slug("Café Ünïcode") == "caf-ncode"

    def test_nothing_usable_gives_empty_slug(self):
        assert derive_slug("!!! ???") == ""
        assert derive_slug("") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "My Cool Page!",
            "  multiple   spaces -- here ",
            "---leading and trailing---",
            "Tabs\tand\nnewlines",
            "already-a-slug",
            "UPPER_case_with_underscores",
            "Ωmega -- ßeta",
        ],
    )
    def test_idempotent(self, text):
        once = derive_slug(text)
        assert derive_slug(once) == once
        assert re.fullmatch(r"([a-z0-9]+(-[a-z0-9]+)*)?", once)
