"""Data-access interfaces the tooltip engine depends on."""

from abc import ABC, abstractmethod
from typing import Iterable

from tooltip_taxonomy.entities import Condition, TaxonomyTerm


class ConditionRepository(ABC):
    """Source of tooltip conditions."""

    @abstractmethod
    def list_conditions(self) -> list[Condition]:
        """Return every condition sorted by ascending weight.

        Raises:
            LookupFailure: If the conditions cannot be loaded.
        """
        pass


class TermRepository(ABC):
    """Source of taxonomy terms."""

    @abstractmethod
    def load_term_tree(self, vid: str) -> list[TaxonomyTerm]:
        """Return all terms of a vocabulary as a flat list.

        Raises:
            LookupFailure: If the terms cannot be loaded.
        """
        pass


class InMemoryConditionRepository(ConditionRepository):
    """Condition repository backed by a list."""

    def __init__(self, conditions: Iterable[Condition] = ()) -> None:
        self._conditions = list(conditions)

    def add(self, condition: Condition) -> None:
        self._conditions.append(condition)

    def list_conditions(self) -> list[Condition]:
        # sorted() is stable, so equal weights keep insertion order
        return sorted(self._conditions, key=lambda c: c.weight)


class InMemoryTermRepository(TermRepository):
    """Term repository backed by a dict of vocabulary id to terms."""

    def __init__(self, terms: Iterable[TaxonomyTerm] = ()) -> None:
        self._terms: dict[str, list[TaxonomyTerm]] = {}
        for term in terms:
            self.add(term)

    def add(self, term: TaxonomyTerm) -> None:
        self._terms.setdefault(term.vid, []).append(term)

    def load_term_tree(self, vid: str) -> list[TaxonomyTerm]:
        return sorted(self._terms.get(vid, []), key=lambda t: (t.weight, t.name))
