"""
Configuration management for the JOSE SDK

Settings are plain dataclasses that can be built from a dictionary, a JSON
document, a JSON file or ``JOSE_SDK_*`` environment variables. A process-wide
default is consulted by algorithm construction, RSA key generation and the
claims time checks.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..exceptions import ConfigError

# Hard floor for RSA moduli. Configuration may raise it, never lower it.
RSA_MIN_KEY_BITS = 1024

ENV_PREFIX = "JOSE_SDK_"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "WARNING"

    def __post_init__(self):
        self.level = str(self.level).upper()
        if self.level not in _VALID_LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.level}", details={'level': self.level})

    def apply(self, logger_name: str = "jose_sdk") -> logging.Logger:
        """Set the SDK logger level and return the logger."""
        logger = logging.getLogger(logger_name)
        logger.setLevel(getattr(logging, self.level))
        return logger


@dataclass
class JoseConfig:
    """
    SDK configuration

    Attributes:
        min_rsa_key_bits: Smallest RSA modulus accepted (at least 1024)
        claims_leeway_seconds: Clock skew allowed by exp/nbf/iat checks
        logging: Logging configuration
    """
    min_rsa_key_bits: int = RSA_MIN_KEY_BITS
    claims_leeway_seconds: int = 0
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Validate configuration"""
        if not isinstance(self.min_rsa_key_bits, int) or self.min_rsa_key_bits < RSA_MIN_KEY_BITS:
            raise ConfigError(
                f"min_rsa_key_bits must be an integer >= {RSA_MIN_KEY_BITS}",
                details={'min_rsa_key_bits': self.min_rsa_key_bits}
            )

        if not isinstance(self.claims_leeway_seconds, int) or self.claims_leeway_seconds < 0:
            raise ConfigError(
                "claims_leeway_seconds must be a non-negative integer",
                details={'claims_leeway_seconds': self.claims_leeway_seconds}
            )

        if isinstance(self.logging, dict):
            self.logging = LoggingConfig(**self.logging)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'JoseConfig':
        """Build configuration from a dictionary"""
        try:
            logging_data = data.get('logging', {})
            return cls(
                min_rsa_key_bits=data.get('min_rsa_key_bits', RSA_MIN_KEY_BITS),
                claims_leeway_seconds=data.get('claims_leeway_seconds', 0),
                logging=LoggingConfig(**logging_data),
            )
        except (AttributeError, TypeError) as e:
            raise ConfigError(f"Invalid configuration format: {e}") from e

    @classmethod
    def from_json(cls, json_string: str) -> 'JoseConfig':
        """Build configuration from a JSON document"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR") from e

        if not isinstance(data, dict):
            raise ConfigError("Configuration JSON must be an object", "INVALID_FORMAT")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config_from_file(path: Union[str, Path]) -> JoseConfig:
    """Load configuration from a JSON file"""
    try:
        content = Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}", "FILE_ERROR") from e
    return JoseConfig.from_json(content)


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> JoseConfig:
    """
    Load configuration from ``JOSE_SDK_*`` environment variables.

    Recognised variables: ``JOSE_SDK_MIN_RSA_KEY_BITS``,
    ``JOSE_SDK_CLAIMS_LEEWAY_SECONDS`` and ``JOSE_SDK_LOG_LEVEL``.
    Unset variables keep their defaults.
    """
    env = os.environ if environ is None else environ
    data: Dict[str, Any] = {}

    try:
        if f"{ENV_PREFIX}MIN_RSA_KEY_BITS" in env:
            data['min_rsa_key_bits'] = int(env[f"{ENV_PREFIX}MIN_RSA_KEY_BITS"])
        if f"{ENV_PREFIX}CLAIMS_LEEWAY_SECONDS" in env:
            data['claims_leeway_seconds'] = int(env[f"{ENV_PREFIX}CLAIMS_LEEWAY_SECONDS"])
    except ValueError as e:
        raise ConfigError(f"Invalid integer in environment configuration: {e}", "INVALID_FORMAT") from e

    if f"{ENV_PREFIX}LOG_LEVEL" in env:
        data['logging'] = {'level': env[f"{ENV_PREFIX}LOG_LEVEL"]}

    return JoseConfig.from_dict(data)


_default_config = JoseConfig()


def get_default_config() -> JoseConfig:
    """Return the process-wide default configuration"""
    return _default_config


def set_default_config(config: JoseConfig) -> None:
    """Replace the process-wide default configuration"""
    global _default_config
    if not isinstance(config, JoseConfig):
        raise ConfigError("Default configuration must be a JoseConfig instance")
    _default_config = config


def reset_default_config() -> None:
    """Restore the built-in defaults"""
    set_default_config(JoseConfig())
