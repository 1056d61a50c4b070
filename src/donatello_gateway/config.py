"""Configuration settings for Donatello Gateway."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Backend (image analysis, Walrus storage, Gemini chat)
    backend_url: str = "http://127.0.0.1:5000"

    # Mint requests may go to a different backend
    mint_backend_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("mint_backend_url", "python_backend_url"),
    )

    # Walrus storage network used for blob URLs and verification
    walrus_network: Literal["testnet", "mainnet"] = "testnet"

    # Upload limits
    max_image_size_bytes: int = 16 * 1024 * 1024  # 16MB

    # Outbound HTTP
    http_timeout: float = 30.0

    # Server Configuration
    server_host: str = "0.0.0.0"
    server_port: int = 3000

    # API Configuration
    api_prefix: str = "/api"
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def mint_url(self) -> str:
        """Base URL used for mint relays."""
        return (self.mint_backend_url or self.backend_url).rstrip("/")

    @property
    def backend_base(self) -> str:
        return self.backend_url.rstrip("/")


settings = Settings()
