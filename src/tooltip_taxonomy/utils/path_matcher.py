"""Request path matching against wildcard page patterns."""

import re
from functools import lru_cache

FRONT_TOKEN = "<front>"


def normalize_path(path: str) -> str:
    """Lowercase a request path and drop its trailing slash ("/" stays "/")."""
    path = path.strip().lower()
    if path != "/":
        path = path.rstrip("/")
    return path or "/"


@lru_cache(maxsize=256)
def compile_pages(pages: tuple[str, ...], front_page: str) -> re.Pattern[str]:
    """Compile page patterns into one anchored regex.

    ``*`` matches any run of characters and ``<front>`` stands for the front
    page path.
    """
    alternatives = []
    for page in pages:
        page = page.strip().lower()
        if not page:
            continue
        if page == FRONT_TOKEN:
            alternatives.append(re.escape(normalize_path(front_page)))
            continue
        alternatives.append(".*".join(re.escape(part) for part in page.split("*")))
    return re.compile("^(?:" + "|".join(alternatives) + ")$")


def match_path(path: str, pages: tuple[str, ...], front_page: str = "/node") -> bool:
    """Return True if ``path`` matches any of ``pages``."""
    if not any(page.strip() for page in pages):
        return False
    return compile_pages(pages, front_page).match(normalize_path(path)) is not None
