"""Contextual taxonomy-term tooltips for rendered text fields."""

from tooltip_taxonomy.engines.tooltip_manager import TooltipManager, TooltipResult
from tooltip_taxonomy.entities import (
    ALL_VIEW_MODES,
    Condition,
    ContentTypeRule,
    EntityRef,
    FieldValue,
    PathRule,
    RenderingContext,
    TaxonomyTerm,
)

__version__ = "0.1.0"

__all__ = [
    "ALL_VIEW_MODES",
    "Condition",
    "ContentTypeRule",
    "EntityRef",
    "FieldValue",
    "PathRule",
    "RenderingContext",
    "TaxonomyTerm",
    "TooltipManager",
    "TooltipResult",
]
