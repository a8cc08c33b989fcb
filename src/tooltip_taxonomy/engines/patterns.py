"""Term-name search patterns and their tooltip replacements."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional

from tooltip_taxonomy.config import TooltipConfig
from tooltip_taxonomy.entities import TaxonomyTerm
from tooltip_taxonomy.logging_config import get_logger
from tooltip_taxonomy.rendering import TooltipPayload, TooltipRenderer
from tooltip_taxonomy.repositories import TermRepository
from tooltip_taxonomy.utils.html import plain_text_length, strip_tags

logger = get_logger(__name__)


class PatternCompiler(ABC):
    """Builds and compiles whole-word search patterns for term names."""

    @abstractmethod
    def name_pattern(self, name: str) -> str:
        """Return the search pattern source for a literal term name."""
        pass

    @abstractmethod
    def compile(self, pattern: str) -> re.Pattern[str]:
        """Compile a pattern source."""
        pass

    @abstractmethod
    def strip_boundaries(self, pattern: str) -> str:
        """Return the literal text a pattern searches for.

        One leading and one trailing word-boundary marker are dropped and any
        escaping is undone, so another name pattern can be searched in it.
        """
        pass


class RegexPatternCompiler(PatternCompiler):
    """``re`` based compiler using ``\\b`` word boundaries."""

    BOUNDARY = r"\b"
    ESCAPED_CHAR = re.compile(r"\\(.)", re.DOTALL)

    def name_pattern(self, name: str) -> str:
        return self.BOUNDARY + re.escape(name) + self.BOUNDARY

    def compile(self, pattern: str) -> re.Pattern[str]:
        return re.compile(pattern)

    def strip_boundaries(self, pattern: str) -> str:
        if pattern.startswith(self.BOUNDARY):
            pattern = pattern[len(self.BOUNDARY) :]
        if pattern.endswith(self.BOUNDARY):
            pattern = pattern[: -len(self.BOUNDARY)]
        return self.ESCAPED_CHAR.sub(r"\1", pattern)


@dataclass(frozen=True)
class PatternEntry:
    """One pattern slot: a term name's search pattern and its replacement."""

    name: str
    search: str
    matcher: re.Pattern[str]
    replacement: str


class PatternBuilder:
    """Accumulates pattern slots from vocabularies, one slot per term name.

    Vocabularies must be added in ascending condition weight order: a term
    name seen again keeps its slot and position, only the replacement is
    overwritten, so the heaviest condition's rendering wins.
    """

    def __init__(
        self,
        terms: TermRepository,
        renderer: TooltipRenderer,
        term_url: Callable[[int], str],
        config: Optional[TooltipConfig] = None,
        compiler: Optional[PatternCompiler] = None,
    ) -> None:
        self.terms = terms
        self.renderer = renderer
        self.term_url = term_url
        self.config = config or TooltipConfig()
        self.compiler = compiler or RegexPatternCompiler()
        self._entries: dict[str, PatternEntry] = {}

    @property
    def entries(self) -> list[PatternEntry]:
        """Pattern slots in insertion order."""
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def add_vocabulary_terms(self, vids: Iterable[str]) -> int:
        """Add every described term of the given vocabularies.

        Returns:
            Number of terms that created or updated a slot.
        """
        count = 0
        for vid in vids:
            for term in self.terms.load_term_tree(vid):
                payload = self.build_payload(term)
                if payload is None:
                    continue
                self._put(term.name, self.renderer.render(payload))
                count += 1
        return count

    def build_payload(self, term: TaxonomyTerm) -> Optional[TooltipPayload]:
        """Build the tooltip payload for a term, or None if it has no description."""
        description = strip_tags(term.description, self.config.allowed_tags)
        if not description:
            return None

        limit = self.config.truncate_length
        if plain_text_length(term.description) > limit:
            description = (
                description[:limit]
                + "..."
                + "<br/>"
                + f"<a href='{self.term_url(term.tid)}'>"
                + f"<strong>{self.config.read_more_label}</strong></a>"
            )

        return TooltipPayload(
            id=f"{term.vid}-{term.tid}",
            term_name=term.name,
            description=description,
        )

    def _put(self, name: str, replacement: str) -> None:
        search = self.compiler.name_pattern(name)
        existing = self._entries.get(search)
        if existing is None:
            self._entries[search] = PatternEntry(
                name=name,
                search=search,
                matcher=self.compiler.compile(search),
                replacement=replacement,
            )
        else:
            self._entries[search] = replace(existing, replacement=replacement)
