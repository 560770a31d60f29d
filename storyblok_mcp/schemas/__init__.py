"""
Schemas Module - Pydantic Models

Data models for story summaries, search matches and validation results.
"""

from storyblok_mcp.schemas.story import StorySummary, SearchMatch
from storyblok_mcp.schemas.validation import Diagnostic, ValidationReport, StoryValidation

__all__ = [
    "StorySummary",
    "SearchMatch",
    "Diagnostic",
    "ValidationReport",
    "StoryValidation",
]
