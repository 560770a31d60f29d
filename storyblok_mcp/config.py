"""
Storyblok MCP Server - Configuration

Pydantic Settings for all configuration via environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, ValidationError
from typing import Literal

from storyblok_mcp.exceptions import ConfigurationError


class StoryblokSettings(BaseSettings):
    """Storyblok space identity and API configuration."""
    space_id: str = Field(..., alias="STORYBLOK_SPACE_ID")
    management_token: str = Field(..., alias="STORYBLOK_MANAGEMENT_TOKEN")
    public_token: str = Field(..., alias="STORYBLOK_DEFAULT_PUBLIC_TOKEN")
    management_api_url: str = Field(
        "https://mapi.storyblok.com/v1", alias="STORYBLOK_MANAGEMENT_API_URL"
    )
    content_api_url: str = Field(
        "https://api.storyblok.com/v2", alias="STORYBLOK_CONTENT_API_URL"
    )
    timeout_seconds: float = Field(30.0, alias="STORYBLOK_TIMEOUT_SECONDS")
    concurrency: int = Field(5, alias="STORYBLOK_CONCURRENCY")

    model_config = {
        "env_prefix": "",
        "extra": "ignore",
        "frozen": True,
        "populate_by_name": True,
    }


class QuerySettings(BaseSettings):
    """Pagination limits for aggregated queries."""
    default_per_page: int = Field(25, alias="QUERY_DEFAULT_PER_PAGE")
    scan_per_page: int = Field(100, alias="QUERY_SCAN_PER_PAGE")
    max_pages: int = Field(10, alias="QUERY_MAX_PAGES")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class MCPSettings(BaseSettings):
    """MCP server configuration."""
    transport: Literal["sse", "stdio"] = Field("stdio", alias="MCP_TRANSPORT")
    port: int = Field(8080, alias="MCP_PORT")
    host: str = Field("0.0.0.0", alias="MCP_HOST")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", alias="LOG_LEVEL"
    )

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    storyblok: StoryblokSettings = Field(default_factory=StoryblokSettings)
    query: QuerySettings = Field(default_factory=QuerySettings)
    mcp: MCPSettings = Field(default_factory=MCPSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    try:
        return Settings()
    except ValidationError as e:
        missing = ", ".join(
            str(err["loc"][-1]) for err in e.errors() if err.get("loc")
        )
        raise ConfigurationError(
            f"Invalid Storyblok configuration; check environment variables ({missing})",
            stage="config",
        ) from e
