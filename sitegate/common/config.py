"""Configuration management for sitegate.

Handles loading and validation of YAML configuration files. The
configuration covers logging and record redaction policies. The permission
name mapping and role templates are fixed in code and cannot be
configured, since stored capability sets depend on them.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..permissions.checker import PermissionResolver
from ..permissions.redaction import (
    BUILTIN_POLICIES,
    DEFAULT_SENSITIVE_FIELDS,
    RedactionPolicy,
    RedactionRegistry,
)


@dataclass
class LoggingConfig:
    """Configuration for logging output."""

    level: str = "INFO"
    log_dir: str = "/var/log/sitegate"
    file_logging: bool = False
    console_logging: bool = True


@dataclass
class RedactionConfig:
    """Configuration for record redaction."""

    default_fields: List[str] = field(
        default_factory=lambda: list(DEFAULT_SENSITIVE_FIELDS)
    )
    # record type -> sensitive fields; overrides built-in policies
    policies: Dict[str, List[str]] = field(default_factory=dict)
    include_builtin_policies: bool = True


@dataclass
class SiteGateConfig:
    """Top-level configuration for sitegate."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    redaction: RedactionConfig = field(default_factory=RedactionConfig)


def parse_logging_config(logging_dict: Dict[str, Any]) -> LoggingConfig:
    """Parse a logging configuration dictionary.

    Args:
        logging_dict: Logging configuration dictionary

    Returns:
        LoggingConfig instance
    """
    return LoggingConfig(
        level=str(logging_dict.get("level", "INFO")).upper(),
        log_dir=logging_dict.get("log_dir", "/var/log/sitegate"),
        file_logging=logging_dict.get("file_logging", False),
        console_logging=logging_dict.get("console_logging", True),
    )


def parse_redaction_config(redaction_dict: Dict[str, Any]) -> RedactionConfig:
    """Parse a redaction configuration dictionary.

    Args:
        redaction_dict: Redaction configuration dictionary

    Returns:
        RedactionConfig instance

    Raises:
        TypeError: If a policy's field list is not a list
    """
    policies = {}
    for record_type, fields in (redaction_dict.get("policies") or {}).items():
        if fields is None:
            fields = []
        if not isinstance(fields, list):
            raise TypeError(
                f"Redaction fields for '{record_type}' must be a list, "
                f"got {type(fields).__name__}"
            )
        policies[str(record_type)] = [str(f) for f in fields]

    default_fields = redaction_dict.get("default_fields")
    if default_fields is None:
        default_fields = list(DEFAULT_SENSITIVE_FIELDS)

    return RedactionConfig(
        default_fields=[str(f) for f in default_fields],
        policies=policies,
        include_builtin_policies=redaction_dict.get("include_builtin_policies", True),
    )


def parse_config(config_dict: Dict[str, Any]) -> SiteGateConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        SiteGateConfig instance
    """
    logging_config = LoggingConfig()
    if "logging" in config_dict:
        logging_config = parse_logging_config(config_dict["logging"] or {})

    redaction_config = RedactionConfig()
    if "redaction" in config_dict:
        redaction_config = parse_redaction_config(config_dict["redaction"] or {})

    return SiteGateConfig(logging=logging_config, redaction=redaction_config)


def build_redaction_registry(config: RedactionConfig) -> RedactionRegistry:
    """Create a redaction registry from configuration.

    Configured policies replace built-in ones for the same record type.
    """
    builtin = BUILTIN_POLICIES if config.include_builtin_policies else ()
    registry = RedactionRegistry(builtin, default_fields=config.default_fields)
    for record_type, fields in config.policies.items():
        registry.register(RedactionPolicy(record_type, tuple(fields)))
    return registry


def build_resolver(config: Optional[SiteGateConfig] = None) -> PermissionResolver:
    """Create a PermissionResolver using the configured redaction policies."""
    if config is None:
        config = SiteGateConfig()
    return PermissionResolver(redaction=build_redaction_registry(config.redaction))


def load_config(config_path: str = "/etc/sitegate/config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        TypeError: If the YAML root is not a mapping
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
    """Recursively expand environment variables in configuration."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: str = "/etc/sitegate/config.yaml") -> SiteGateConfig:
    """Load and parse configuration into typed dataclasses.

    Args:
        config_path: Path to configuration file

    Returns:
        SiteGateConfig instance
    """
    config_dict = load_config(config_path)
    return parse_config(config_dict)
