"""Shared fixtures for xbl-status tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from xbl_status.config.models import XblStatusConfig

SAMPLE_CONFIG: Dict[str, Any] = {
    "fetcher": {
        "url": "wss://status.example.test/ws/LIVEAuthentication",
        "origin": "https://xblstatus.com",
        "timeout_ms": 2000,
        "operational_color": "#0c0",
    },
    "api": {"host": "127.0.0.1", "port": 8123},
}


@pytest.fixture()
def sample_config() -> XblStatusConfig:
    """Return a parsed XblStatusConfig from sample data."""
    return XblStatusConfig(**SAMPLE_CONFIG)


@pytest.fixture()
def sample_config_dict() -> Dict[str, Any]:
    return dict(SAMPLE_CONFIG)


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    """Write sample config to a temp .xbl-status.yaml and return the path."""
    path = tmp_path / ".xbl-status.yaml"
    with path.open("w") as fh:
        yaml.dump(SAMPLE_CONFIG, fh)
    return path
