"""Tooltip manager: attaches taxonomy tooltips to rendered text fields."""

from typing import Callable, NamedTuple, Optional

from tooltip_taxonomy.config import Config
from tooltip_taxonomy.engines.base import BaseEngine
from tooltip_taxonomy.engines.matcher import ConditionMatcher
from tooltip_taxonomy.engines.overlap import OverlapResolver
from tooltip_taxonomy.engines.patterns import (
    PatternBuilder,
    PatternCompiler,
    RegexPatternCompiler,
)
from tooltip_taxonomy.engines.rewriter import TextRewriter
from tooltip_taxonomy.entities import (
    Condition,
    EntityRef,
    FieldValue,
    RenderingContext,
)
from tooltip_taxonomy.logging_config import bind_rendering_context, get_logger
from tooltip_taxonomy.rendering import (
    MarkupTooltipRenderer,
    TermUrlBuilder,
    TooltipRenderer,
)
from tooltip_taxonomy.repositories import ConditionRepository, TermRepository

logger = get_logger(__name__)


def condition_cache_tag(condition_id: str, prefix: str = "tooltip_taxonomy") -> str:
    """Cache tag invalidated whenever the condition changes."""
    return f"{prefix}:{condition_id}"


class TooltipResult(NamedTuple):
    """Outcome of one rewrite.

    ``text`` is empty when nothing was contributed; that is not an error.
    """

    text: str
    cache_tags: list[str]


class TooltipManager(BaseEngine):
    """Selects conditions, builds term patterns and rewrites field text."""

    def __init__(
        self,
        config: Config,
        conditions: ConditionRepository,
        terms: TermRepository,
        renderer: Optional[TooltipRenderer] = None,
        term_url: Optional[Callable[[int], str]] = None,
        compiler: Optional[PatternCompiler] = None,
    ) -> None:
        """Initialize the manager with its collaborators.

        Args:
            config: Application configuration.
            conditions: Where tooltip conditions are read from.
            terms: Where vocabulary term trees are read from.
            renderer: Tooltip fragment renderer, markupsafe based by default.
            term_url: Canonical term URL builder, built from
                ``config.tooltip.base_url`` by default.
            compiler: Search pattern compiler, ``re`` based by default.
        """
        self.config = config
        self.conditions = conditions
        self.terms = terms
        self.renderer = renderer or MarkupTooltipRenderer(config.tooltip.css_class)
        self.term_url = term_url or TermUrlBuilder.from_config(config.tooltip)
        self.compiler = compiler or RegexPatternCompiler()
        self.matcher = ConditionMatcher(config.tooltip.front_page)
        self.resolver = OverlapResolver(self.compiler)
        self.rewriter = TextRewriter(self.compiler)

    def check_path_and_content_type(self, context: RenderingContext) -> list[Condition]:
        """Return conditions whose path and content-type rules match ``context``."""
        return self.matcher.select_applicable(context, self.conditions.list_conditions())

    def rewrite(self, context: RenderingContext) -> TooltipResult:
        """Annotate the field text of ``context`` with tooltips."""
        with bind_rendering_context(context):
            return self._rewrite(context)

    def _rewrite(self, context: RenderingContext) -> TooltipResult:
        builder = PatternBuilder(
            self.terms,
            self.renderer,
            self.term_url,
            config=self.config.tooltip,
            compiler=self.compiler,
        )
        cache_tags: list[str] = []

        for condition in self.check_path_and_content_type(context):
            if not self.matcher.accepts_field(condition, context):
                continue
            builder.add_vocabulary_terms(condition.vocabularies)
            if condition.vocabularies:
                cache_tags.append(
                    condition_cache_tag(condition.id, self.config.tooltip.cache_tag_prefix)
                )

        text = context.value.text
        patterns = self.resolver.filter_applicable(builder.entries, text)
        if not patterns:
            logger.debug(
                "No tooltip terms in field",
                field=context.field_key,
                patterns=len(builder),
            )
            return TooltipResult("", cache_tags)

        return TooltipResult(self.rewriter.rewrite(text, patterns), cache_tags)

    def add_tooltip(
        self,
        view_mode: str,
        entity: EntityRef,
        field_name: str,
        field_value: FieldValue,
        cache_tags: list[str],
        *,
        path: str,
        path_alias: Optional[str] = None,
    ) -> str:
        """Return ``field_value`` text with tooltip markup, or "" if none applies.

        Cache tags of the contributing conditions are appended to
        ``cache_tags``.
        """
        context = RenderingContext(
            path=path,
            entity=entity,
            view_mode=view_mode,
            field_name=field_name,
            value=field_value,
            path_alias=path_alias,
        )
        result = self.rewrite(context)
        cache_tags.extend(result.cache_tags)
        return result.text

    def has_tooltip(self, vid: str) -> list[str]:
        """Return the ids of all conditions that use vocabulary ``vid``."""
        return [c.id for c in self.conditions.list_conditions() if vid in c.vocabularies]

    def process(self, context: RenderingContext) -> TooltipResult:
        """Process a rendering context (alias of :meth:`rewrite`)."""
        return self.rewrite(context)
