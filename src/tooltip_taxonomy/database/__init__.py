"""Database models and repositories for tooltip-taxonomy."""

from tooltip_taxonomy.database.manager import (
    DatabaseManager,
    close_database,
    initialize_database,
)
from tooltip_taxonomy.database.models import FilterCondition, Term, Vocabulary
from tooltip_taxonomy.database.repository import (
    DatabaseConditionRepository,
    DatabaseTermRepository,
)

__all__ = [
    "DatabaseManager",
    "initialize_database",
    "close_database",
    "DatabaseConditionRepository",
    "DatabaseTermRepository",
    "FilterCondition",
    "Term",
    "Vocabulary",
]
