"""Application configuration using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_search.retrieval.aggregator import FieldWeights
from catalog_search.retrieval.search_engine import SearchConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The scoring constants were tuned empirically against the storefront
    catalog. They are exposed here so they can be overridden per deployment,
    not so they can be re-derived.
    """

    # API Settings
    api_title: str = Field(default="Catalog Search", description="API title")
    api_version: str = Field(default="1.0.0", description="API version")

    # Logging Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Catalog Settings
    catalog_api_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL of the storefront catalog API",
    )
    catalog_timeout: float = Field(
        default=15.0,
        gt=0.0,
        description="Catalog fetch timeout in seconds",
    )
    catalog_fetch_limit: int = Field(
        default=1000,
        ge=1,
        description="Page size requested from the catalog API (all items in one call)",
    )
    catalog_ttl_seconds: float = Field(
        default=300.0,
        gt=0.0,
        description="Catalog snapshot time-to-live in seconds",
    )

    # Scoring Settings
    weight_name: float = Field(default=4.0, ge=0.0, description="Weight of the name field")
    weight_category: float = Field(
        default=2.5, ge=0.0, description="Weight of the category name field"
    )
    weight_brand: float = Field(default=2.5, ge=0.0, description="Weight of the brand name field")
    weight_description: float = Field(
        default=1.0, ge=0.0, description="Weight of the description field"
    )
    min_score: float = Field(
        default=0.1,
        ge=0.0,
        description="Minimum aggregate score for an item to be included in results",
    )
    score_epsilon: float = Field(
        default=0.01,
        ge=0.0,
        description="Score difference below which the ranker falls through to tie-breaks",
    )

    # Result Settings
    default_limit: int = Field(default=20, ge=1, le=200, description="Default search limit")
    max_results: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Maximum results computed for the full search page",
    )
    max_suggestions: int = Field(
        default=8,
        ge=1,
        le=50,
        description="Maximum autocomplete suggestions",
    )

    # Debounce Settings
    autocomplete_debounce_ms: int = Field(
        default=200,
        ge=0,
        le=5000,
        description="Debounce window for navbar autocomplete",
    )
    search_debounce_ms: int = Field(
        default=300,
        ge=0,
        le=5000,
        description="Debounce window for the search results page",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @field_validator("catalog_api_url")
    @classmethod
    def validate_catalog_api_url(cls, v: str) -> str:
        """Ensure the catalog URL is absolute and has no trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"catalog_api_url must start with http:// or https://, got '{v}'")
        return v.rstrip("/")

    def model_post_init(self, __context) -> None:
        """Additional validation after model initialization."""
        if self.default_limit > self.max_results:
            raise ValueError(
                f"default_limit ({self.default_limit}) must be <= "
                f"max_results ({self.max_results})"
            )

    def field_weights(self) -> FieldWeights:
        """Build per-field weights from settings."""
        return FieldWeights(
            name=self.weight_name,
            category=self.weight_category,
            brand=self.weight_brand,
            description=self.weight_description,
        )

    def search_config(self) -> SearchConfig:
        """Build the search engine configuration from settings."""
        return SearchConfig(
            weights=self.field_weights(),
            min_score=self.min_score,
            score_epsilon=self.score_epsilon,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings: The application settings

    Raises:
        ValueError: If settings validation fails
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing).

    Returns:
        Settings: The reloaded application settings
    """
    global _settings
    _settings = Settings()
    return _settings
