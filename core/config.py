from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class CrowdSettings(BaseSettings):
    # Map overview / nearby / live push
    MAP_WINDOW_MINUTES: int = 120
    MAP_RECENT_WINDOW_MINUTES: int = 10
    MAP_DECAY_MINUTES: float = 60.0

    # Single-station "current status" reacts faster to new reports
    STATION_WINDOW_MINUTES: int = 60
    STATION_RECENT_WINDOW_MINUTES: int = 10
    STATION_DECAY_MINUTES: float = 20.0
    STATION_REPORT_LIMIT: int = 10

    RECENT_BOOST: float = 4.0
    OVERRIDE_THRESHOLD: float = 2.0  # On the 1-3 ordinal scale
    CONFIDENCE_SATURATION_COUNT: int = 5

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Settings(BaseSettings):
    # Database - No default password for security
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""  # Required via .env
    POSTGRES_DB: str = "metro_crowd_dev"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    # Full SQLAlchemy URL, takes precedence over POSTGRES_* (e.g. sqlite for tests)
    DATABASE_URL_OVERRIDE: str = ""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # Default to False for security
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Station network dataset: "json" (NETWORK_DATA_DIR) or "database"
    NETWORK_DATA_SOURCE: str = "json"
    NETWORK_DATA_DIR: str = "data"

    # Rate limiting (disable for local load tests)
    RATE_LIMIT_ENABLED: bool = True

    # Nearby stations search
    NEARBY_MAX_DISTANCE_M: int = 5000
    NEARBY_LIMIT: int = 10

    # Crowd aggregation settings (nested)
    crowd: CrowdSettings = CrowdSettings()

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+psycopg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def validate_production_settings(self) -> None:
        """Validate critical settings for production environment.

        Call this during application startup.
        Raises ValueError if production settings are invalid.
        """
        errors = []

        if self.is_production:
            if not self.DATABASE_URL_OVERRIDE and (
                not self.POSTGRES_PASSWORD or self.POSTGRES_PASSWORD == "postgres"
            ):
                errors.append(
                    "POSTGRES_PASSWORD must be set to a secure value in production"
                )

            if self.DEBUG:
                errors.append("DEBUG must be False in production")

            if self.NETWORK_DATA_SOURCE not in ("json", "database"):
                errors.append(
                    f"NETWORK_DATA_SOURCE must be 'json' or 'database', got '{self.NETWORK_DATA_SOURCE}'"
                )

        if errors:
            raise ValueError(
                "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    def validate_development_settings(self) -> None:
        """Set sensible defaults for development if not configured."""
        # Use default password for development if not set
        if not self.POSTGRES_PASSWORD and not self.DATABASE_URL_OVERRIDE:
            self.POSTGRES_PASSWORD = "postgres"
            print("WARNING: Using default POSTGRES_PASSWORD for development")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create settings instance
settings = Settings()

# Validate based on environment
if settings.is_production:
    settings.validate_production_settings()
else:
    settings.validate_development_settings()
