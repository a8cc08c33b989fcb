"""Default tooltip fragment rendering and term URL building."""

from abc import ABC, abstractmethod
from typing import NamedTuple

from markupsafe import Markup

from tooltip_taxonomy.config import TooltipConfig


class TooltipPayload(NamedTuple):
    """Data handed to a renderer for one term."""

    id: str
    term_name: str
    description: str  # already sanitized HTML


class TooltipRenderer(ABC):
    """Turns a payload into the HTML fragment that replaces a term name."""

    @abstractmethod
    def render(self, payload: TooltipPayload) -> str:
        """Render the tooltip fragment for one term."""
        pass


class MarkupTooltipRenderer(TooltipRenderer):
    """Renders a span-based tooltip; the term name is escaped."""

    TEMPLATE = Markup(
        '<span class="{css_class}" data-tooltip-id="{id}">'
        '<span class="{css_class}__term">{name}</span>'
        '<span class="{css_class}__description" role="tooltip">{description}</span>'
        "</span>"
    )

    def __init__(self, css_class: str = "tooltip-taxonomy") -> None:
        self.css_class = css_class

    def render(self, payload: TooltipPayload) -> str:
        return str(
            self.TEMPLATE.format(
                css_class=self.css_class,
                id=payload.id,
                name=payload.term_name,
                description=Markup(payload.description),
            )
        )


class TermUrlBuilder:
    """Builds absolute canonical URLs for taxonomy terms."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def __call__(self, tid: int) -> str:
        return f"{self.base_url}/taxonomy/term/{tid}"

    @classmethod
    def from_config(cls, config: TooltipConfig) -> "TermUrlBuilder":
        return cls(config.base_url)
