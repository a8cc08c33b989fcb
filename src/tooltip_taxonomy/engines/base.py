"""Base class for tooltip-taxonomy engines."""

from abc import ABC, abstractmethod
from typing import Any


class BaseEngine(ABC):
    """An engine turns one rendering request into a result."""

    @abstractmethod
    def process(self, *args: Any, **kwargs: Any) -> Any:
        """Process one request and return its result."""
        pass
