from .errors import ConfigurationError
from .logging import setup_logging
from .settings import AuthStrategyName, Settings, StorageBackend, get_settings

__all__ = [
    "AuthStrategyName",
    "ConfigurationError",
    "Settings",
    "StorageBackend",
    "get_settings",
    "setup_logging",
]
