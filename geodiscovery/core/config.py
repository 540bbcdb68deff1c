"""Application configuration."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_GEOCODING_PROVIDERS = ("nominatim", "arcgis")


class Settings(BaseSettings):
    """
    Discovery engine settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "Remnants Geo Discovery"
    version: str = "0.1.0"

    # Geocoding Settings
    GEOCODING_PROVIDER: str = "nominatim"
    GEOCODING_MIN_DELAY_MS: int = Field(
        default=200, ge=0
    )  # Minimum gap between consecutive provider calls
    GEOCODING_TIMEOUT: int = Field(default=10, gt=0)
    NOMINATIM_USER_AGENT: str = "remnants-geodiscovery"

    # Clustering Settings
    CLUSTER_MIN_SIZE: int = Field(default=3, ge=2)
    CLUSTER_BYPASS_COUNT: int = Field(default=5, ge=0)
    CLUSTER_FINE_ZOOM_CUTOFF: float = Field(default=0.03, ge=0)

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @model_validator(mode="after")
    def validate_geocoding_provider(self) -> "Settings":
        """Normalize and validate the geocoding provider name."""
        provider = self.GEOCODING_PROVIDER.strip().lower()
        if provider not in SUPPORTED_GEOCODING_PROVIDERS:
            raise ValueError(
                f"GEOCODING_PROVIDER must be one of: {', '.join(SUPPORTED_GEOCODING_PROVIDERS)}"
            )
        self.GEOCODING_PROVIDER = provider
        return self

    @property
    def geocoding_min_delay_seconds(self) -> float:
        """Minimum provider delay expressed in seconds."""
        return self.GEOCODING_MIN_DELAY_MS / 1000


# Create settings instance
settings = Settings()
