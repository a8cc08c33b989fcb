"""Condition matching: which conditions apply to a rendering context."""

from typing import Iterable

from tooltip_taxonomy.entities import (
    Condition,
    ContentTypeRule,
    PathRule,
    RenderingContext,
    Rule,
)
from tooltip_taxonomy.logging_config import get_logger
from tooltip_taxonomy.utils.path_matcher import match_path

logger = get_logger(__name__)


def evaluate_rule(rule: Rule, context: RenderingContext, front_page: str = "/node") -> bool:
    """Evaluate a single restriction rule against a rendering context.

    A path rule without pages never matches. A content-type rule only
    constrains content entities; for any other entity it is satisfied.
    """
    if isinstance(rule, PathRule):
        if rule.is_empty:
            return False
        matched = match_path(context.path, rule.pages, front_page)
        if not matched and context.path_alias:
            matched = match_path(context.path_alias, rule.pages, front_page)
        return matched ^ rule.negate

    if isinstance(rule, ContentTypeRule):
        if rule.is_empty or not context.entity.is_content:
            return True
        return context.entity.bundle in rule.bundles

    raise TypeError(f"Unsupported rule type: {type(rule).__name__}")


class ConditionMatcher:
    """Selects conditions whose path and content-type rules fit a context."""

    def __init__(self, front_page: str = "/node") -> None:
        self.front_page = front_page

    def select_applicable(
        self, context: RenderingContext, conditions: Iterable[Condition]
    ) -> list[Condition]:
        """Return matching conditions in ascending weight order."""
        matched: list[Condition] = []
        for condition in sorted(conditions, key=lambda c: c.weight):
            if condition.path is None:
                continue
            if not evaluate_rule(condition.path, context, self.front_page):
                continue
            if evaluate_rule(condition.content_types, context, self.front_page):
                matched.append(condition)

        logger.debug(
            "Path and content type check",
            path=context.path,
            matched=[c.id for c in matched],
        )
        return matched

    @staticmethod
    def accepts_field(condition: Condition, context: RenderingContext) -> bool:
        """Apply the format, view mode and field allow-lists of a condition."""
        if context.value.format not in condition.formats:
            return False

        if (
            not condition.applies_to_all_view_modes()
            and context.view_mode not in condition.view_modes
        ):
            return False

        if condition.fields and context.field_key not in condition.fields:
            return False

        return True
