"""Pydantic models for xbl-status configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_URL = "wss://kvchecker.com/ws/LIVEAuthentication"
DEFAULT_ORIGIN = "https://xblstatus.com"


class FetcherSettings(BaseModel):
    """Connection and classification settings for the status fetcher."""

    url: str = DEFAULT_URL
    origin: str = DEFAULT_ORIGIN
    timeout_ms: int = Field(default=5000, gt=0)
    operational_color: str = "#0c0"
    max_message_size: int = Field(default=2**20, gt=0)
    close_timeout: float = Field(default=5.0, gt=0)


class ApiSettings(BaseModel):
    """Bind address for ``xbl-status serve``."""

    host: str = "0.0.0.0"
    port: int = 8000


class XblStatusConfig(BaseModel):
    """Root configuration model for .xbl-status.yaml."""

    fetcher: FetcherSettings = Field(default_factory=FetcherSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
