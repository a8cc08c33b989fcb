"""HTML sanitizing helpers for term descriptions."""

from typing import Iterable

from bs4 import BeautifulSoup, Comment


def strip_tags(html: str, allowed_tags: Iterable[str] = ()) -> str:
    """Remove every tag not in ``allowed_tags``, keeping the inner text.

    Comments are dropped. Allowed tags are kept with their attributes.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    allowed = {tag.lower() for tag in allowed_tags}
    if not allowed:
        return soup.get_text()

    for tag in soup.find_all(True):
        if tag.name not in allowed:
            tag.unwrap()

    return str(soup)


def plain_text_length(html: str) -> int:
    """Length of ``html`` once every tag is stripped."""
    return len(strip_tags(html))
