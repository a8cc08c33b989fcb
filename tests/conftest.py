"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from tooltip_taxonomy.config import Config
from tooltip_taxonomy.database import close_database, initialize_database
from tooltip_taxonomy.database.models import Vocabulary
from tooltip_taxonomy.engines.patterns import PatternEntry, RegexPatternCompiler
from tooltip_taxonomy.engines.tooltip_manager import TooltipManager
from tooltip_taxonomy.entities import (
    Condition,
    EntityRef,
    FieldValue,
    PathRule,
    RenderingContext,
    TaxonomyTerm,
)
from tooltip_taxonomy.rendering import TooltipPayload, TooltipRenderer
from tooltip_taxonomy.repositories import (
    InMemoryConditionRepository,
    InMemoryTermRepository,
)


class RecordingRenderer(TooltipRenderer):
    """Renders a bare <dfn> and remembers every payload."""

    def __init__(self) -> None:
        self.payloads: list[TooltipPayload] = []

    def render(self, payload: TooltipPayload) -> str:
        self.payloads.append(payload)
        return f'<dfn data-id="{payload.id}">{payload.term_name}</dfn>'


def term_url(tid: int) -> str:
    return f"https://example.com/taxonomy/term/{tid}"


@pytest.fixture
def temp_db() -> Generator[Path, None, None]:
    """Create a temporary database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    yield db_path

    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture
def config(temp_db: Path) -> Config:
    """Create a test configuration."""
    config = Config.load(environ={})
    config.database.path = str(temp_db)
    config.tooltip.base_url = "https://example.com"
    return config


@pytest.fixture
def initialized_db(config: Config) -> Generator[Vocabulary, None, None]:
    """Initialize database and return a test vocabulary."""
    initialize_database(config)
    vocabulary = Vocabulary.create(vid="animals", name="Animals")
    yield vocabulary
    close_database()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def sample_terms() -> list[TaxonomyTerm]:
    """Terms of the 'animals' vocabulary."""
    return [
        TaxonomyTerm(tid=1, vid="animals", name="cat", description="<p>A small <b>feline</b>.</p>"),
        TaxonomyTerm(tid=2, vid="animals", name="cat food", description="Food for cats.", weight=1),
        TaxonomyTerm(tid=3, vid="animals", name="dog", description="A loyal friend.", weight=2),
        TaxonomyTerm(tid=4, vid="animals", name="ghost", description="<p></p>", weight=3),
    ]


@pytest.fixture
def term_repository(sample_terms: list[TaxonomyTerm]) -> InMemoryTermRepository:
    return InMemoryTermRepository(sample_terms)


@pytest.fixture
def everywhere_condition() -> Condition:
    """Applies the 'animals' vocabulary to basic_html fields on every page."""
    return Condition(
        id="animals_everywhere",
        vocabularies=("animals",),
        path=PathRule(("*",)),
        formats=frozenset({"basic_html"}),
    )


@pytest.fixture
def manager_factory(
    config: Config, term_repository: InMemoryTermRepository, renderer: RecordingRenderer
) -> Callable[..., TooltipManager]:
    """Build a manager over in-memory repositories for the given conditions."""

    def factory(*conditions: Condition) -> TooltipManager:
        return TooltipManager(
            config,
            InMemoryConditionRepository(conditions),
            term_repository,
            renderer=renderer,
            term_url=term_url,
        )

    return factory


@pytest.fixture
def make_entry() -> Callable[[str, str], PatternEntry]:
    """Build a pattern slot for a term name."""
    compiler = RegexPatternCompiler()

    def factory(name: str, replacement: str) -> PatternEntry:
        search = compiler.name_pattern(name)
        return PatternEntry(
            name=name,
            search=search,
            matcher=compiler.compile(search),
            replacement=replacement,
        )

    return factory


@pytest.fixture
def make_context() -> Callable[..., RenderingContext]:
    """Build a rendering context for an article body field."""

    def factory(
        text: str = "",
        path: str = "/node/1",
        text_format: str = "basic_html",
        view_mode: str = "full",
        field_name: str = "body",
        entity: EntityRef = EntityRef("node", "article"),
        path_alias: str | None = None,
    ) -> RenderingContext:
        return RenderingContext(
            path=path,
            entity=entity,
            view_mode=view_mode,
            field_name=field_name,
            value=FieldValue(text, text_format),
            path_alias=path_alias,
        )

    return factory
