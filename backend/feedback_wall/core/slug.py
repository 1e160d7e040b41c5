import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def derive_slug(text: str) -> str:
    """Turn a page title (or a hand-edited slug) into a URL-safe slug.

    >>> derive_slug("My Cool Page!")
    'my-cool-page'
    >>> derive_slug("  multiple   spaces -- here ")
    'multiple-spaces-here'

    Applying it to its own output returns the same value.
    """
    slug = _DISALLOWED.sub("", (text or "").lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
