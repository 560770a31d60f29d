"""
Storyblok MCP Server - Exceptions

Error taxonomy shared by the client, the query pipeline and the tools.
"""

from typing import Any, Dict, Optional


class StoryblokMCPError(Exception):
    """Base error carrying a machine-readable code and the failing stage."""

    error_code = "STORYBLOK_MCP_ERROR"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def to_payload(self) -> Dict[str, Any]:
        """Structured error payload returned by tools."""
        payload: Dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.stage:
            payload["stage"] = self.stage
        return payload


class ConfigurationError(StoryblokMCPError):
    """Missing or invalid Storyblok credentials."""

    error_code = "CONFIGURATION_ERROR"


class StoryblokAPIError(StoryblokMCPError):
    """A request to the Storyblok API failed.

    ``status_code`` is ``None`` when no response was received at all.
    """

    error_code = "STORYBLOK_API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        stage: Optional[str] = "fetch",
    ):
        super().__init__(message, stage=stage)
        self.status_code = status_code
        self.url = url
        if status_code is None:
            self.error_code = "NETWORK_ERROR"


class QueryError(StoryblokMCPError):
    """A query could not produce any meaningful result."""

    error_code = "QUERY_ERROR"
