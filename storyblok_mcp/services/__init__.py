"""
Services Module - Business Logic Layer

Provides the story query service, schema validation and component listing.
"""

from storyblok_mcp.services.schema_validator import SchemaValidator
from storyblok_mcp.services.query_service import QueryService
from storyblok_mcp.services.component_service import ComponentService

__all__ = [
    "SchemaValidator",
    "QueryService",
    "ComponentService",
]
