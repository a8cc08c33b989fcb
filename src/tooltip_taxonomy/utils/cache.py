"""In-memory caching of vocabulary term trees."""

from typing import Callable, Optional

from tooltip_taxonomy.entities import TaxonomyTerm
from tooltip_taxonomy.logging_config import get_logger

logger = get_logger(__name__)


class TermTreeCache:
    """Vocabulary-scoped cache of term trees.

    Every field rendered on a page asks for the same vocabularies, so the
    trees are loaded once and kept until a vocabulary's terms change.
    Callers must invalidate after adding, updating or deleting terms.
    """

    def __init__(self) -> None:
        """Initialize the cache."""
        self._trees: dict[str, list[TaxonomyTerm]] = {}

    def get_term_tree(
        self,
        vid: str,
        fetch_func: Callable[[str], list[TaxonomyTerm]],
    ) -> list[TaxonomyTerm]:
        """Get a vocabulary's term tree, loading it on a cache miss.

        Args:
            vid: The vocabulary id
            fetch_func: Loads the tree from storage on a cache miss.
                Errors it raises are not cached and propagate.

        Returns:
            A copy of the cached term list
        """
        if vid not in self._trees:
            self._trees[vid] = fetch_func(vid)
            logger.debug("Cached term tree", vid=vid, count=len(self._trees[vid]))
        return list(self._trees[vid])

    def invalidate_vocabulary(self, vid: str) -> None:
        """Drop the cached tree of one vocabulary."""
        if self._trees.pop(vid, None) is not None:
            logger.debug("Invalidated term tree cache", vid=vid)

    def invalidate_all(self) -> None:
        """Drop every cached tree."""
        self._trees.clear()
        logger.debug("Invalidated all term tree caches")

    def __contains__(self, vid: str) -> bool:
        return vid in self._trees


# Global cache instance (singleton pattern)
_cache_instance: Optional[TermTreeCache] = None


def get_cache() -> TermTreeCache:
    """Get the global cache instance."""
    global _cache_instance
    if _cache_instance is None:
        _cache_instance = TermTreeCache()
    return _cache_instance
