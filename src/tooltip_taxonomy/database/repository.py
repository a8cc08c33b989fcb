"""Peewee-backed condition and term repositories."""

from typing import Optional

from peewee import PeeweeException

from tooltip_taxonomy.database.models import FilterCondition, Term
from tooltip_taxonomy.entities import Condition, TaxonomyTerm
from tooltip_taxonomy.exceptions import DatabaseError, LookupFailure
from tooltip_taxonomy.logging_config import get_logger
from tooltip_taxonomy.repositories import ConditionRepository, TermRepository
from tooltip_taxonomy.utils.cache import TermTreeCache, get_cache

logger = get_logger(__name__)


class DatabaseConditionRepository(ConditionRepository):
    """Reads conditions from the ``filter_conditions`` table."""

    def list_conditions(self) -> list[Condition]:
        try:
            rows = FilterCondition.select().order_by(
                FilterCondition.weight, FilterCondition.cid
            )
            return [row.to_entity() for row in rows]
        except PeeweeException as e:
            raise LookupFailure(f"Failed to load tooltip conditions: {e}") from e

    def save(self, condition: Condition) -> None:
        """Insert or update a condition."""
        try:
            FilterCondition.from_entity(condition)
        except PeeweeException as e:
            raise DatabaseError(
                f"Failed to save condition: {e}", details=f"Condition: {condition.id}"
            ) from e


class DatabaseTermRepository(TermRepository):
    """Reads term trees from the ``taxonomy_terms`` table through a cache."""

    def __init__(self, cache: Optional[TermTreeCache] = None) -> None:
        self.cache = cache or get_cache()

    def load_term_tree(self, vid: str) -> list[TaxonomyTerm]:
        return self.cache.get_term_tree(vid, self._fetch)

    def _fetch(self, vid: str) -> list[TaxonomyTerm]:
        try:
            rows = (
                Term.select()
                .where(Term.vocabulary == vid)
                .order_by(Term.weight, Term.name)
            )
            return [row.to_entity() for row in rows]
        except PeeweeException as e:
            raise LookupFailure(
                f"Failed to load term tree: {e}", details=f"Vocabulary: {vid}"
            ) from e

    def add_term(
        self, vid: str, name: str, description: str = "", weight: int = 0
    ) -> TaxonomyTerm:
        """Create a term and invalidate its vocabulary's cached tree."""
        try:
            row = Term.create(
                vocabulary=vid, name=name, description=description, weight=weight
            )
        except PeeweeException as e:
            raise DatabaseError(
                f"Failed to create term: {e}", details=f"Vocabulary: {vid}"
            ) from e
        self.cache.invalidate_vocabulary(vid)
        logger.debug("Created term", vid=vid, tid=row.tid)
        return row.to_entity()
