"""Client configuration."""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from dragdropdo.const import API_KEY, API_URL, REQUEST_TIMEOUT_SECONDS
from dragdropdo.exceptions import D3ValidationError


class ClientConfig(BaseModel):
    """Configuration for a :class:`~dragdropdo.client.Dragdropdo` client.

    Attributes:
        api_key: Bearer credential attached to every API request.
        base_url: Root URL of the D3 business API.
        timeout: Connect and read timeout in seconds for every HTTP call.
        headers: Extra headers merged over the default API headers.
    """

    api_key: Optional[str] = None
    base_url: str = API_URL
    timeout: float = REQUEST_TIMEOUT_SECONDS
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, value: Optional[str]) -> str:
        if not value:
            return API_URL
        return value.rstrip("/")

    @field_validator("timeout", mode="before")
    @classmethod
    def _default_timeout(cls, value: Optional[float]) -> float:
        if value is None or float(value) <= 0:
            return REQUEST_TIMEOUT_SECONDS
        return float(value)

    @field_validator("headers", mode="before")
    @classmethod
    def _default_headers(cls, value: Optional[dict[str, str]]) -> dict[str, str]:
        return dict(value or {})

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """Build a configuration from DRAGDROPDO_* environment variables.

        Keyword arguments override the environment.
        """
        values = {
            "api_key": os.getenv("DRAGDROPDO_API_KEY", API_KEY),
            "base_url": os.getenv("DRAGDROPDO_API_URL", API_URL),
            "timeout": os.getenv("DRAGDROPDO_TIMEOUT", REQUEST_TIMEOUT_SECONDS),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def require_api_key(self) -> str:
        """Return the API key or raise if it is missing."""
        if not self.api_key:
            raise D3ValidationError("API key is required")
        return self.api_key
