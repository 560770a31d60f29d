"""
Services - Schema Validator

Checks story content against a component's field schema.
"""

from typing import Any, Dict, Iterable, List

from storyblok_mcp.schemas.validation import Diagnostic, ValidationReport

# Keys every component instance carries without declaring them
RESERVED_FIELDS = ("component", "_uid", "_editable")


class SchemaValidator:
    """Diffs a content mapping against a component schema."""

    def __init__(self, reserved_fields: Iterable[str] = RESERVED_FIELDS):
        self.reserved_fields = frozenset(reserved_fields)

    def validate(
        self,
        content: Dict[str, Any],
        schema: Dict[str, Any],
    ) -> ValidationReport:
        """
        Validate content fields against a schema.

        The schema is a closed field set: any content field it does not
        declare is reported, as is any required field the content lacks.

        Args:
            content: Component instance (field name -> value)
            schema: Component schema (field name -> descriptor)

        Returns:
            ValidationReport with missing and extraneous fields
        """
        content = content if isinstance(content, dict) else {}
        errors: List[Diagnostic] = []
        missing: List[str] = []
        extraneous: List[str] = []

        for name, descriptor in schema.items():
            if not self._is_required(descriptor):
                continue
            if name not in content:
                missing.append(name)
                errors.append(Diagnostic(
                    type="missing_required",
                    field=name,
                    message=f"Required field '{name}' is missing",
                ))

        for name in content:
            if name in schema or name in self.reserved_fields:
                continue
            extraneous.append(name)
            errors.append(Diagnostic(
                type="extraneous_field",
                field=name,
                message=f"Field '{name}' is not defined in the component schema",
            ))

        return ValidationReport(
            is_valid=not errors,
            missing_fields=missing,
            extraneous_fields=extraneous,
            errors=errors,
        )

    @staticmethod
    def _is_required(descriptor: Any) -> bool:
        return isinstance(descriptor, dict) and descriptor.get("required") is True
