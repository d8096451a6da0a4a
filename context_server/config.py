from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_METHODS = "GET, POST, OPTIONS"
DEFAULT_CORS_HEADERS = "Origin, X-Requested-With, Content-Type, Accept"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="allow",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # --- Server identity ---
    server_name: str = Field(default="Izawa MCP Server", validation_alias="SERVER_NAME")
    server_description: str = Field(
        default="Provides a profile and blog posts.",
        validation_alias="SERVER_DESCRIPTION",
    )
    port: int = Field(default=3000, validation_alias="PORT")

    # --- Content ---
    data_dir: str = Field(default="data", validation_alias="DATA_DIR")
    static_dir: str = Field(default="public", validation_alias="STATIC_DIR")
    content_read_timeout: float = Field(default=10.0, validation_alias="CONTENT_READ_TIMEOUT")

    # --- CORS ---
    cors_allow_origin: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGIN")
    cors_allow_methods: str = Field(default=DEFAULT_CORS_METHODS, validation_alias="CORS_ALLOW_METHODS")
    cors_allow_headers: str = Field(default=DEFAULT_CORS_HEADERS, validation_alias="CORS_ALLOW_HEADERS")

    # --- Logging ---
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Optional[str] = Field(default=None, validation_alias="LOG_DIR")

    @property
    def default_host(self) -> str:
        return f"localhost:{self.port}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
