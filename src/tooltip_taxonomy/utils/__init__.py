"""Utility functions for markup scanning, sanitizing and path matching."""

from tooltip_taxonomy.utils.html import plain_text_length, strip_tags
from tooltip_taxonomy.utils.path_matcher import match_path, normalize_path
from tooltip_taxonomy.utils.scanner import Span, split_markup

__all__ = [
    "match_path",
    "normalize_path",
    "plain_text_length",
    "split_markup",
    "Span",
    "strip_tags",
]
