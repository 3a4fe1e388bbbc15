"""Locate and load .xbl-status.yaml.

The file is looked up in this order: an explicit path, the
``XBL_STATUS_CONFIG`` environment variable, then a walk up from the working
directory. Only the values under ``fetcher:`` and ``api:`` are read, and
each may reference the environment as ``${VAR}`` or ``${VAR:-default}``,
e.g. ``timeout_ms: ${XBL_TIMEOUT_MS:-5000}``.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from xbl_status.config.models import XblStatusConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".xbl-status.yaml"
CONFIG_ENV_VAR = "XBL_STATUS_CONFIG"

SECTIONS = tuple(XblStatusConfig.model_fields)

_ENV_REF = re.compile(r"\$\{(?P<name>[^}:]+)(?::-(?P<default>[^}]*))?\}")


def expand_setting(value: Any) -> Any:
    """Resolve ``${VAR}`` references in one setting value.

    Unset variables without a default are left as written so validation
    reports them against the field.
    """
    if not isinstance(value, str):
        return value

    def _sub(match: re.Match[str]) -> str:
        name = match.group("name").strip()
        if name in os.environ:
            return os.environ[name]
        default = match.group("default")
        return match.group(0) if default is None else default

    return _ENV_REF.sub(_sub, value)


def _read_sections(raw: Any, source: Path) -> dict[str, dict[str, Any]]:
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid configuration in {source}: top level must be a mapping")
    unknown = sorted(str(key) for key in raw if key not in SECTIONS)
    if unknown:
        raise ValueError(f"Invalid configuration in {source}: unknown section(s) {', '.join(unknown)}")

    data: dict[str, dict[str, Any]] = {}
    for section in SECTIONS:
        values = raw.get(section)
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Invalid configuration in {source}: '{section}' must be a mapping")
        data[section] = {key: expand_setting(v) for key, v in values.items()}
    return data


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default cwd) looking for .xbl-status.yaml."""
    current = (start or Path.cwd()).resolve()
    for ancestor in [current, *current.parents]:
        candidate = ancestor / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None


def load_config(path: Path | None = None, *, required: bool = True) -> XblStatusConfig:
    """Load and validate the config file.

    With ``required=False`` a file that was merely not discovered yields the
    defaults. A path given explicitly or through ``XBL_STATUS_CONFIG`` must
    always exist.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    explicit = path or (Path(env_path) if env_path else None)
    config_path = explicit or find_config_file()

    if config_path is None or not config_path.exists():
        if explicit is None and not required:
            logger.debug("No %s found, using defaults", CONFIG_FILENAME)
            return XblStatusConfig()
        where = f" at {config_path}" if config_path else ""
        raise FileNotFoundError(
            f"Could not find {CONFIG_FILENAME}{where}. Create one, pass --config, or set {CONFIG_ENV_VAR}."
        )

    with config_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    data = _read_sections(raw, config_path)
    try:
        return XblStatusConfig(**data)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration in {config_path}: {exc}") from exc
