"""Rewrites the text spans of an HTML string with tooltip markup."""

import re
from typing import Optional, Sequence

from tooltip_taxonomy.engines.patterns import (
    PatternCompiler,
    PatternEntry,
    RegexPatternCompiler,
)
from tooltip_taxonomy.exceptions import MalformedMarkupError
from tooltip_taxonomy.logging_config import get_logger
from tooltip_taxonomy.utils.scanner import split_markup

logger = get_logger(__name__)


class TextRewriter:
    """Applies pattern replacements to text between tags, never inside them."""

    def __init__(self, compiler: Optional[PatternCompiler] = None) -> None:
        self.compiler = compiler or RegexPatternCompiler()

    def rewrite(self, html: str, patterns: Sequence[PatternEntry]) -> str:
        """Replace every occurrence of every pattern in the text spans of ``html``.

        All patterns are applied in one pass, so inserted tooltip markup is
        never matched again. Malformed markup yields ``html`` unchanged.
        """
        if not patterns:
            return html

        try:
            spans = split_markup(html)
        except MalformedMarkupError as e:
            logger.warning("Malformed markup, skipping tooltips", offset=e.position)
            return html

        combined = self._combine(patterns)
        replacements = {f"t{i}": p.replacement for i, p in enumerate(patterns)}

        def substitute(match: re.Match[str]) -> str:
            return replacements[match.lastgroup]

        return "".join(
            span.text if span.is_markup else combined.sub(substitute, span.text)
            for span in spans
        )

    def _combine(self, patterns: Sequence[PatternEntry]) -> re.Pattern[str]:
        # earlier patterns win when two start at the same offset
        return self.compiler.compile(
            "|".join(f"(?P<t{i}>{p.search})" for i, p in enumerate(patterns))
        )
