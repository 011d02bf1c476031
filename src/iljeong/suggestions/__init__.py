"""Suggestions module for iljeong.

Provides quick-action command suggestions.
"""

from iljeong.suggestions.generator import GENERIC_SUGGESTION, SuggestionGenerator

__all__ = ["GENERIC_SUGGESTION", "SuggestionGenerator"]
