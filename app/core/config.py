from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal, Optional, Union
import os
import json


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=f"config/{os.getenv('ENV', 'local')}.env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "local"
    log_level: str = "INFO"
    api_prefix: str = "/api"

    # "http" forwards to the downstream product API, "memory" keeps products in-process
    product_store: Literal["http", "memory"] = "http"
    downstream_base_url: Optional[str] = None
    downstream_timeout_seconds: float = 10.0

    # Role checks are only enforced when auth is enabled
    auth_enabled: bool = False
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "GatewayApi"
    jwt_audience: str = "GatewayApiUsers"

    # CORS origins - can be JSON array or comma-separated string
    cors_origins: Union[List[str], str] = [
        "http://localhost:5044",
        "https://localhost:7131",
        "http://127.0.0.1:3000",
        "https://127.0.0.1:3000",
    ]

    @field_validator("downstream_timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("downstream_timeout_seconds must be greater than 0")
        return value

    @field_validator("downstream_base_url")
    @classmethod
    def _strip_base_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None

    @model_validator(mode="after")
    def _check_required(self) -> "Settings":
        if self.product_store == "http" and not self.downstream_base_url:
            raise ValueError("DOWNSTREAM_BASE_URL is required when PRODUCT_STORE is 'http'")
        if self.auth_enabled and not self.jwt_secret_key:
            raise ValueError("JWT_SECRET_KEY is required when AUTH_ENABLED is true")
        return self

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list, accepting JSON or comma-separated strings."""
        if isinstance(self.cors_origins, str):
            try:
                origins = json.loads(self.cors_origins)
            except (json.JSONDecodeError, ValueError):
                origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        else:
            origins = self.cors_origins

        return origins if isinstance(origins, list) else [origins]


settings = Settings()
