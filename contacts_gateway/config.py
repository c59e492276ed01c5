"""Configuration for the Contacts Gateway."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Contacts Gateway settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service settings
    service_name: str = "contacts-gateway"
    environment: str = "development"
    log_level: str = "INFO"

    # Server settings
    host: str = "0.0.0.0"  # nosec B104 (binding to all interfaces for Docker)
    port: int = 8003

    # Google People API
    people_api_base_url: str = "https://people.googleapis.com/v1"
    default_scopes: list[str] = ["contacts"]
    default_read_mask: str = "names,emailAddresses,phoneNumbers"
    directory_source: str = "DIRECTORY_SOURCE_TYPE_DOMAIN_PROFILE"
    request_timeout: float = 10.0

    # Google OAuth2 settings (refresh token grant)
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_refresh_token: Optional[str] = None

    # Pre-issued access token, used instead of the refresh grant when set
    google_access_token: Optional[str] = None


class PeopleAPIConfig(BaseModel):
    """Immutable People API constants injected into the gateway."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://people.googleapis.com/v1"
    default_scopes: tuple[str, ...] = ("contacts",)
    default_read_mask: str = "names,emailAddresses,phoneNumbers"
    directory_source: str = "DIRECTORY_SOURCE_TYPE_DOMAIN_PROFILE"

    @classmethod
    def from_settings(cls, settings: Settings) -> "PeopleAPIConfig":
        """Build the API constants from loaded settings."""
        return cls(
            base_url=settings.people_api_base_url.rstrip("/"),
            default_scopes=tuple(settings.default_scopes) or ("contacts",),
            default_read_mask=settings.default_read_mask,
            directory_source=settings.directory_source,
        )


settings = Settings()
