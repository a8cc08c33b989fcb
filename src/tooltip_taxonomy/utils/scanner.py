"""Tag-aware splitting of HTML into markup and text spans."""

from typing import NamedTuple

from tooltip_taxonomy.exceptions import MalformedMarkupError


class Span(NamedTuple):
    """A slice of an HTML string."""

    text: str
    is_markup: bool


def split_markup(html: str) -> list[Span]:
    """Split ``html`` into alternating text and ``<...>`` markup spans.

    Empty text spans are skipped. Joining the spans gives back ``html``.

    Raises:
        MalformedMarkupError: If a ``<`` has no closing ``>``.
    """
    spans: list[Span] = []
    content_start = 0
    tag_begin = html.find("<")

    while tag_begin != -1:
        tag_end = html.find(">", tag_begin)
        if tag_end == -1:
            raise MalformedMarkupError(tag_begin)
        tag_end += 1

        if content_start < tag_begin:
            spans.append(Span(html[content_start:tag_begin], False))
        spans.append(Span(html[tag_begin:tag_end], True))

        content_start = tag_end
        tag_begin = html.find("<", tag_end)

    if content_start < len(html):
        spans.append(Span(html[content_start:], False))

    return spans
