"""Configuration management for the Sales Enablement Engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# A local .env is optional; deployed environments set variables directly
try:
    load_dotenv()
except (PermissionError, OSError):
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # Environment
    APP_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")

    # HubSpot configuration (optional - absent token means demo mode)
    HUBSPOT_ACCESS_TOKEN: str | None = Field(
        default=None, description="HubSpot private app token; unset runs sync in demo mode"
    )
    HUBSPOT_API_URL: str = Field(
        default="https://api.hubapi.com", description="HubSpot API base URL"
    )
    HUBSPOT_TIMEOUT_SECONDS: int = Field(default=15, description="HubSpot request timeout")

    # Recommendation configuration
    RECOMMENDATION_PAGE_SIZE: int = Field(
        default=10, description="Assets fetched per query recommendation"
    )
    SIMILAR_ASSETS_LIMIT: int = Field(
        default=5, description="Max assets returned by 'more like this'"
    )
    DEAL_DETAIL_RECOMMENDATIONS: int = Field(
        default=6, description="Stored recommendations shown on the deal detail view"
    )

    # Recent searches
    RECENT_SEARCHES_LIMIT: int = Field(default=5, description="Recent searches kept per user")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
