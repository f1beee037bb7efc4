from pathlib import Path
from urllib.parse import urlparse

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "user-discovery-service"

    # Upstream services
    USER_SERVICE_URL: str = "http://localhost:3001"
    FOLLOW_SERVICE_URL: str = "http://localhost:3003"

    # =================================================================
    # HTTP CLIENT SETTINGS - timeouts and retry for upstream calls
    # =================================================================
    HTTP_CONNECT_TIMEOUT: float = 5.0
    HTTP_READ_TIMEOUT: float = 10.0
    HTTP_MAX_RETRIES: int = 3
    HTTP_RETRY_BACKOFF: float = 0.1  # 100ms initial backoff
    HTTP_RETRY_MAX_BACKOFF: float = 1.0
    HTTP_MAX_CONNECTIONS: int = 50

    # =================================================================
    # DISCOVERY SETTINGS
    # =================================================================
    # The two operations read the directory with different caps.
    DISCOVERY_DIRECTORY_PAGE_SIZE: int = 1000
    ALL_USERS_DIRECTORY_PAGE_SIZE: int = 100
    DEFAULT_PROFILE_PICTURE: str = "/resources/images/default-profile.png"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def upstream_host(self, url: str) -> str | None:
        """Hostname of an upstream base URL, used in logs and readiness output."""
        try:
            return urlparse(url).hostname
        except ValueError:
            return None

    def get_http_client_config(self) -> dict:
        """
        Get HTTP client configuration for the upstream adapters.
        Adjust environment-specific settings based on self.environment.
        """
        # Base configuration
        config = {
            "connect_timeout": self.HTTP_CONNECT_TIMEOUT,
            "read_timeout": self.HTTP_READ_TIMEOUT,
            "max_retries": self.HTTP_MAX_RETRIES,
            "backoff": self.HTTP_RETRY_BACKOFF,
            "max_backoff": self.HTTP_RETRY_MAX_BACKOFF,
            "max_connections": self.HTTP_MAX_CONNECTIONS,
        }

        if self.environment == "development":
            # Fail fast against local services
            config.update({"max_connections": 10})
        elif self.environment == "test":
            config.update({"max_retries": 1, "backoff": 0.0, "max_backoff": 0.0})

        return config


settings = Settings()
