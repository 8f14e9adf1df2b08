"""
Configuration settings for the Incident Teams Call service.
Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AzureSettings(BaseSettings):
    """Azure AD application (client-credentials) configuration."""
    model_config = SettingsConfigDict(env_prefix="AZ_", env_file=".env", extra="ignore")

    tenant_id: str = Field(default="", description="Azure AD tenant ID")
    client_id: str = Field(default="", description="Azure AD Application (client) ID")
    client_secret: str = Field(default="", description="Azure AD client secret")
    authority_host: str = Field(
        default="https://login.microsoftonline.com",
        description="Identity provider authority host"
    )
    scope: str = Field(
        default="https://graph.microsoft.com/.default",
        description="Scope requested for the application token"
    )

    @property
    def token_endpoint(self) -> str:
        """Token endpoint for the configured tenant."""
        return f"{self.authority_host.rstrip('/')}/{self.tenant_id}/oauth2/v2.0/token"


class GraphSettings(BaseSettings):
    """Microsoft Graph API configuration."""
    model_config = SettingsConfigDict(env_prefix="GRAPH_", env_file=".env", extra="ignore")

    base_url: str = Field(
        default="https://graph.microsoft.com/v1.0",
        description="Graph API base URL"
    )
    timeout_seconds: float = Field(default=30.0, gt=0, description="Outbound request timeout")
    save_to_sent_items: bool = Field(default=True, description="Keep notifications in Sent Items")


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

    # Nested settings
    azure: AzureSettings = Field(default_factory=AzureSettings)
    graph: GraphSettings = Field(default_factory=GraphSettings)

    # Identities
    organizer_upn: str = Field(default="", description="Account meetings are created under")
    from_email: Optional[str] = Field(default=None, description="Override sender mailbox")

    # Application settings
    project_name: str = Field(default="Incident Teams Call", description="API title")
    version: str = Field(default="1.0.0", description="API version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(default=False, description="Also write rotating log files")
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=7071, description="Bind port")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @property
    def sender(self) -> str:
        """Mailbox notifications are sent from."""
        return self.from_email or self.organizer_upn

    def missing_fields(self) -> List[str]:
        """Names of required settings that are empty."""
        required = {
            "AZ_TENANT_ID": self.azure.tenant_id,
            "AZ_CLIENT_ID": self.azure.client_id,
            "AZ_CLIENT_SECRET": self.azure.client_secret,
            "ORGANIZER_UPN": self.organizer_upn,
        }
        return [name for name, value in required.items() if not value]

    @property
    def is_configured(self) -> bool:
        return not self.missing_fields()


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return Settings()
