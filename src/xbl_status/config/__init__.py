"""xbl-status configuration system."""

from xbl_status.config.loader import CONFIG_ENV_VAR, find_config_file, load_config
from xbl_status.config.models import ApiSettings, FetcherSettings, XblStatusConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "ApiSettings",
    "FetcherSettings",
    "XblStatusConfig",
    "find_config_file",
    "load_config",
]
