"""Pattern relevance and overlap elimination."""

from typing import Optional, Sequence

from tooltip_taxonomy.engines.patterns import (
    PatternCompiler,
    PatternEntry,
    RegexPatternCompiler,
)
from tooltip_taxonomy.logging_config import get_logger

logger = get_logger(__name__)


class OverlapResolver:
    """Keeps only patterns that occur in the text and are not part of another."""

    def __init__(self, compiler: Optional[PatternCompiler] = None) -> None:
        self.compiler = compiler or RegexPatternCompiler()

    def filter_applicable(
        self, patterns: Sequence[PatternEntry], source_text: str
    ) -> list[PatternEntry]:
        """Return the surviving patterns in their original order.

        A pattern survives if it matches ``source_text`` and does not match
        inside the literal name text of any other matching
        pattern. Every pair is checked against the full set of matching
        patterns, so a removed pattern still removes the names inside it.
        """
        relevant = [p for p in patterns if p.matcher.search(source_text)]
        if not relevant:
            return []

        subsumed: set[str] = set()
        for small in relevant:
            for big in relevant:
                if small.search == big.search:
                    continue
                if small.matcher.search(self.compiler.strip_boundaries(big.search)):
                    subsumed.add(small.search)
                    break

        survivors = [p for p in relevant if p.search not in subsumed]
        logger.debug(
            "Resolved pattern overlaps",
            total=len(patterns),
            relevant=len(relevant),
            survivors=[p.name for p in survivors],
        )
        return survivors
