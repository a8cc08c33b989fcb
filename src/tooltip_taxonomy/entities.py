"""Domain records consumed by the tooltip engine.

All records are immutable; the engine only reads them.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from tooltip_taxonomy.exceptions import ValidationError

# View-mode value that stands for "every view mode".
ALL_VIEW_MODES = "0"

# Entity type whose bundle is checked against content-type restrictions.
CONTENT_ENTITY_TYPE = "node"


@dataclass(frozen=True)
class PathRule:
    """Request path restriction: one pattern per entry, optionally negated."""

    pages: tuple[str, ...] = ()
    negate: bool = False

    @classmethod
    def from_text(cls, pages: str, negate: bool = False) -> "PathRule":
        """Build a rule from newline separated patterns."""
        return cls(
            pages=tuple(line.strip() for line in pages.splitlines() if line.strip()),
            negate=negate,
        )

    @property
    def is_empty(self) -> bool:
        return not self.pages


@dataclass(frozen=True)
class ContentTypeRule:
    """Content-type (bundle) restriction for content entities."""

    bundles: frozenset[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not self.bundles


Rule = Union[PathRule, ContentTypeRule]


@dataclass(frozen=True)
class Condition:
    """Administrator-defined rule scoping where a vocabulary gets tooltips."""

    id: str
    vocabularies: tuple[str, ...]
    weight: int = 0
    label: str = ""
    path: Optional[PathRule] = None
    content_types: ContentTypeRule = field(default_factory=ContentTypeRule)
    view_modes: frozenset[str] = frozenset()
    formats: frozenset[str] = frozenset()
    fields: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.vocabularies:
            raise ValidationError(
                "A condition needs at least one vocabulary", details=f"Condition: {self.id}"
            )

    def applies_to_all_view_modes(self) -> bool:
        """True when no view mode other than the "all" sentinel is selected."""
        return all(mode == ALL_VIEW_MODES for mode in self.view_modes)


@dataclass(frozen=True)
class TaxonomyTerm:
    """A taxonomy term as loaded from its vocabulary's term tree."""

    tid: int
    vid: str
    name: str
    description: str = ""
    weight: int = 0


@dataclass(frozen=True)
class EntityRef:
    """The entity whose field is being rendered."""

    entity_type: str
    bundle: Optional[str] = None

    @property
    def is_content(self) -> bool:
        return self.entity_type == CONTENT_ENTITY_TYPE


@dataclass(frozen=True)
class FieldValue:
    """A formatted text field value."""

    text: str
    format: str


@dataclass(frozen=True)
class RenderingContext:
    """Everything one rewrite needs to know about where the text is shown."""

    path: str
    entity: EntityRef
    view_mode: str
    field_name: str
    value: FieldValue
    path_alias: Optional[str] = None

    @property
    def field_key(self) -> str:
        """Key used by condition field allow-lists: ``entityType-fieldName``."""
        return f"{self.entity.entity_type}-{self.field_name}"
