"""
Courtfile Configuration
Pydantic Settings for environment-based configuration.
Single source of truth for engine tuning and API settings.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Use .env file for local development, env vars for production.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # App Identity
    # ==========================================================================
    app_name: str = "Courtfile"
    app_version: str = "1.0.0"
    app_description: str = """
## Courtfile - E-Filing Assistance

Helps self-represented filers prepare court documents before submitting
them to a state e-filing portal.

### Key Features
- **Document Validation** - required/optional fields, formats, attachments
- **Document Type Finder** - describe your situation, get matching forms
- **Filing Guidance** - suggestions, warnings and a next-steps checklist
"""
    debug: bool = False
    enable_docs: bool = True

    # ==========================================================================
    # Server
    # ==========================================================================
    host: str = "0.0.0.0"
    port: int = 8000

    # ==========================================================================
    # Relevance Scoring
    # ==========================================================================
    # Each query token found in a document type's name/category/subcategory
    # adds relevance_token_weight; only scores above relevance_threshold are kept.
    relevance_threshold: float = 0.3
    relevance_token_weight: float = 0.2

    # ==========================================================================
    # Filing Guidance
    # ==========================================================================
    incident_details_min_length: int = 100
    incident_detail_fields: str = "incidentDetails"  # Comma-separated field names
    emergency_justification_field: str = "exParteJustification"

    # Off by default: declared attachment sizes are display strings only
    enforce_attachment_size: bool = False

    @field_validator("relevance_threshold", "relevance_token_weight")
    @classmethod
    def validate_unit_interval(cls, v: float) -> float:
        """Scores live in 0..1, so must their tuning knobs."""
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"Must be between 0 and 1, got {v}")
        return v

    # ==========================================================================
    # Observability
    # ==========================================================================
    log_level: str = "INFO"
    log_json_format: bool = False

    # ==========================================================================
    # Deployment
    # ==========================================================================
    cors_origins: str = ""  # Comma-separated list of allowed origins

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS origins into a list with secure defaults.
        - If explicit origins set: use those
        - If empty: restrict to localhost only
        """
        if self.cors_origins:
            if self.cors_origins == "*":
                return ["*"]
            return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

        return [
            "http://localhost:8000",
            "http://127.0.0.1:8000",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    @property
    def incident_detail_fields_list(self) -> list[str]:
        """Parse incident detail field names into a list."""
        return [name.strip() for name in self.incident_detail_fields.split(",") if name.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use dependency injection: Depends(get_settings)
    """
    return Settings()
