"""
Centralized configuration for the callshape package.

Supports loading from YAML files, environment variables, and defaults.
Environment variables take precedence over values read from YAML.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
import logging
import os
from typing import Optional, Dict, Any

import yaml

from .core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = 'CALLSHAPE_'


class LogLevel(Enum):
    """Log levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    def to_logging_level(self) -> int:
        return getattr(logging, self.name)


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ('true', '1', 'yes', 'on'):
        return True
    if lowered in ('false', '0', 'no', 'off'):
        return False
    raise ConfigurationError(
        f"Invalid boolean for {name}",
        context={'value': value},
    )


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return default
    return _parse_bool(value, ENV_PREFIX + name)


def _parse_log_level(value: Any) -> LogLevel:
    if isinstance(value, LogLevel):
        return value
    try:
        return LogLevel(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Unknown log level '{value}'",
            context={'allowed': [level.value for level in LogLevel]},
        ) from None


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: LogLevel = LogLevel.WARNING
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        self.level = _parse_log_level(self.level)

    @classmethod
    def from_env(cls, base: Optional['LoggingConfig'] = None) -> 'LoggingConfig':
        """Load logging config from environment variables."""
        base = base or cls()
        return cls(
            level=_parse_log_level(os.getenv(ENV_PREFIX + 'LOG_LEVEL', base.level.value)),
            format=os.getenv(ENV_PREFIX + 'LOG_FORMAT', base.format),
        )


@dataclass
class ShapeConfig:
    """Shape validation settings."""
    # Reject dimension values below -1 on construction and assignment
    validate_dimensions: bool = True

    def __post_init__(self):
        self.validate_dimensions = _parse_bool(
            self.validate_dimensions, 'shape.validate_dimensions'
        )

    @classmethod
    def from_env(cls, base: Optional['ShapeConfig'] = None) -> 'ShapeConfig':
        """Load shape config from environment variables."""
        base = base or cls()
        return cls(
            validate_dimensions=_env_bool('VALIDATE_DIMENSIONS', base.validate_dimensions),
        )


@dataclass
class DeviceConfig:
    """Device handle settings."""
    default_device: str = "cpu"

    @classmethod
    def from_env(cls, base: Optional['DeviceConfig'] = None) -> 'DeviceConfig':
        """Load device config from environment variables."""
        base = base or cls()
        return cls(
            default_device=os.getenv(ENV_PREFIX + 'DEFAULT_DEVICE', base.default_device),
        )


@dataclass
class CallShapeConfig:
    """Main configuration class for callshape."""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shape: ShapeConfig = field(default_factory=ShapeConfig)
    device: DeviceConfig = field(default_factory=DeviceConfig)

    # Global settings
    debug_mode: bool = False
    config_file: Optional[str] = None

    @classmethod
    def load(cls, path: Optional[str] = None) -> 'CallShapeConfig':
        """
        Load configuration from YAML file and/or environment variables.

        Args:
            path: Path to YAML config file (optional)

        Returns:
            CallShapeConfig instance with loaded settings
        """
        config = cls()

        if path is not None:
            if not os.path.exists(path):
                raise ConfigurationError(
                    "Config file does not exist", context={'path': path}
                )
            with open(path, 'r') as f:
                try:
                    yaml_data = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ConfigurationError(
                        f"Failed to parse config file: {e}", context={'path': path}
                    ) from e

            if yaml_data:
                if not isinstance(yaml_data, dict):
                    raise ConfigurationError(
                        "Config file must contain a mapping", context={'path': path}
                    )
                config = cls._from_dict(yaml_data)
            config.config_file = path
            logger.debug(f"Loaded configuration from {path}")

        # Override with environment variables
        config.logging = LoggingConfig.from_env(config.logging)
        config.shape = ShapeConfig.from_env(config.shape)
        config.device = DeviceConfig.from_env(config.device)

        # Global environment overrides
        config.debug_mode = _env_bool('DEBUG', config.debug_mode)

        return config

    @staticmethod
    def _section(section_cls, data: Any, name: str):
        if data is None:
            return section_cls()
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config section '{name}' must be a mapping")
        known = {f.name for f in fields(section_cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown keys in config section '{name}'",
                context={'keys': unknown},
            )
        return section_cls(**data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'CallShapeConfig':
        """Create config from dictionary (YAML data)."""
        return cls(
            logging=cls._section(LoggingConfig, data.get('logging'), 'logging'),
            shape=cls._section(ShapeConfig, data.get('shape'), 'shape'),
            device=cls._section(DeviceConfig, data.get('device'), 'device'),
            debug_mode=_parse_bool(data.get('debug_mode', False), 'debug_mode'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            'logging': {
                'level': self.logging.level.value,
                'format': self.logging.format,
            },
            'shape': {
                'validate_dimensions': self.shape.validate_dimensions,
            },
            'device': {
                'default_device': self.device.default_device,
            },
            'debug_mode': self.debug_mode,
        }

    def save(self, path: str) -> None:
        """Save configuration to YAML file."""
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


# Global configuration instance
_config: Optional[CallShapeConfig] = None


def get_config() -> CallShapeConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = CallShapeConfig.load()
    return _config


def set_config(config: Optional[CallShapeConfig]) -> None:
    """Set the global configuration instance (``None`` reloads lazily)."""
    global _config
    _config = config


def load_config(path: Optional[str] = None) -> CallShapeConfig:
    """Load configuration from file and/or environment."""
    return CallShapeConfig.load(path)
