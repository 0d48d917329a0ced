"""
Configuration management for the JOSE Python SDK
"""

from .jose_config import (
    JoseConfig,
    LoggingConfig,
    RSA_MIN_KEY_BITS,
    load_config_from_file,
    load_config_from_env,
    get_default_config,
    set_default_config,
    reset_default_config,
)

__all__ = [
    'JoseConfig',
    'LoggingConfig',
    'RSA_MIN_KEY_BITS',
    'load_config_from_file',
    'load_config_from_env',
    'get_default_config',
    'set_default_config',
    'reset_default_config',
]
