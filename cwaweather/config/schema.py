"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, field_validator

from cwaweather.config.defaults import DEFAULT_LOCATION, VALID_LOCATIONS

CWA_BASE_URL = "https://opendata.cwa.gov.tw/api"


class CwaConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = CWA_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    environment: str = "development"
    cors_origins: list[str] = ["*"]


class ProxyConfig(BaseModel):
    model_config = {"extra": "forbid"}

    cwa: CwaConfig = CwaConfig()
    server: ServerConfig = ServerConfig()
    default_location: str = DEFAULT_LOCATION

    @field_validator("default_location")
    @classmethod
    def _known_location(cls, value: str) -> str:
        if value not in VALID_LOCATIONS:
            raise ValueError(f"default_location must be one of the supported locations, got {value!r}")
        return value
