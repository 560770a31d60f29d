"""
Schemas - Validation Models

Pydantic models for component schema validation results.
"""

from pydantic import BaseModel
from typing import List, Literal, Optional, Union


class Diagnostic(BaseModel):
    """One schema violation."""
    type: Literal["missing_required", "extraneous_field"]
    field: str
    message: str


class ValidationReport(BaseModel):
    """Outcome of validating content against a schema."""
    is_valid: bool
    missing_fields: List[str] = []
    extraneous_fields: List[str] = []
    errors: List[Diagnostic] = []


class StoryValidation(BaseModel):
    """Validation annotation for one story."""
    story_id: Optional[Union[int, str]] = None
    component: Optional[str] = None
    schema_found: bool
    error: Optional[str] = None
    validation: Optional[ValidationReport] = None
