"""Engines for condition matching, pattern building and text rewriting."""

from tooltip_taxonomy.engines.matcher import ConditionMatcher, evaluate_rule
from tooltip_taxonomy.engines.overlap import OverlapResolver
from tooltip_taxonomy.engines.patterns import (
    PatternBuilder,
    PatternCompiler,
    PatternEntry,
    RegexPatternCompiler,
)
from tooltip_taxonomy.engines.rewriter import TextRewriter
from tooltip_taxonomy.engines.tooltip_manager import (
    TooltipManager,
    TooltipResult,
    condition_cache_tag,
)

__all__ = [
    "ConditionMatcher",
    "OverlapResolver",
    "PatternBuilder",
    "PatternCompiler",
    "PatternEntry",
    "RegexPatternCompiler",
    "TextRewriter",
    "TooltipManager",
    "TooltipResult",
    "condition_cache_tag",
    "evaluate_rule",
]
