from .loader import ConfigError, load_config, get_config, reload_config
from .schema import TechsignalConfig

__all__ = [
    "ConfigError",
    "load_config",
    "get_config",
    "reload_config",
    "TechsignalConfig",
]
