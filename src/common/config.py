"""Configuration management for cgmanifest.

Handles loading of the YAML configuration file that supplies the distribution
identity for Linux components and the logging settings.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from ..components.base import DistroInfo
from .logger import DEFAULT_LOG_DIR, setup_logger

DEFAULT_CONFIG_PATH = "/etc/cgmanifest/config.yaml"


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    log_dir: str = DEFAULT_LOG_DIR
    file_logging: bool = False
    console_logging: bool = True


@dataclass
class CgManifestConfig:
    """Top-level configuration for cgmanifest."""

    distro: DistroInfo = field(default_factory=DistroInfo)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def parse_logging_config(logging_dict: Dict[str, Any]) -> LoggingConfig:
    """Parse a logging configuration dictionary.

    Args:
        logging_dict: Logging configuration dictionary

    Returns:
        LoggingConfig instance
    """
    return LoggingConfig(
        level=logging_dict.get("level", "INFO"),
        log_dir=logging_dict.get("log_dir", DEFAULT_LOG_DIR),
        file_logging=logging_dict.get("file_logging", False),
        console_logging=logging_dict.get("console_logging", True),
    )


def parse_config(config_dict: Dict[str, Any]) -> CgManifestConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        CgManifestConfig instance
    """
    distro = DistroInfo()
    if config_dict.get("distro"):
        distro = DistroInfo.from_dict(config_dict["distro"])

    logging_config = LoggingConfig()
    if config_dict.get("logging"):
        logging_config = parse_logging_config(config_dict["logging"])

    return CgManifestConfig(distro=distro, logging=logging_config)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        TypeError: If the document root is not a mapping
        yaml.YAMLError: If config file is invalid YAML
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return _expand_env_vars(config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in string values."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: str = DEFAULT_CONFIG_PATH) -> CgManifestConfig:
    """Load and parse configuration into typed dataclasses.

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    return parse_config(load_config(config_path))


def configure_logging(config: CgManifestConfig, name: str = "component") -> logging.Logger:
    """Apply the logging section to the component loggers.

    Args:
        config: CgManifestConfig instance
        name: Parent logger name of the component modules

    Returns:
        Configured logger
    """
    return setup_logger(
        name,
        log_dir=config.logging.log_dir,
        level=config.logging.level,
        file_logging=config.logging.file_logging,
        console_logging=config.logging.console_logging,
    )
