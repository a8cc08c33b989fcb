"""Custom exception hierarchy for tooltip-taxonomy."""

from typing import Optional


class TooltipTaxonomyError(Exception):
    """Base exception for all tooltip-taxonomy errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(TooltipTaxonomyError):
    """Error in configuration loading or validation."""

    pass


class DatabaseError(TooltipTaxonomyError):
    """Error in database operations."""

    pass


class LookupFailure(TooltipTaxonomyError):
    """A condition or term repository could not answer a lookup.

    Never caught by the rewrite engine; it propagates to the caller and only
    aborts the current rewrite.
    """

    pass


class ValidationError(TooltipTaxonomyError):
    """Error in input validation."""

    pass


class MalformedMarkupError(TooltipTaxonomyError):
    """A '<' was found without a closing '>'."""

    def __init__(self, position: int) -> None:
        super().__init__(
            "Unterminated tag in markup", details=f"'<' at offset {position}"
        )
        self.position = position
