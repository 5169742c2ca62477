"""AppSettings -- Gatekeeper application configuration.

All environment variables are read via pydantic-settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Gatekeeper settings, loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Upstream console API (owns users, roles and permissions)
    API_BASE_URL: str = "http://api.internal/api"
    API_TIMEOUT_SECONDS: int = 10

    # Where unauthenticated navigation is sent
    LOGIN_PATH: str = "/login"

    # "development" makes caller precondition violations raise instead of no-op
    ENVIRONMENT: str = "production"

    # Persisted sidebar/theme flags
    UI_PREFERENCES_PATH: str = ".gatekeeper/ui-preferences.json"

    @property
    def strict_preconditions(self) -> bool:
        return self.ENVIRONMENT == "development"


settings = AppSettings()
