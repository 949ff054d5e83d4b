"""
Configuration management for the deployment script.

Holds the tenant, subscription and region the solution is deployed to. Defaults
can be overridden by a YAML file and by command-line options.
"""

import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import Draft7Validator

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TENANT_ID = "33ce68e6-c5a8-455c-8741-b3ebb73dcb06"
SUBSCRIPTION_ID = "7c8b2a60-04bf-498a-bbac-ce9ee669564a"
LOCATION = "centralus"
DEFAULT_ENV_NAME = "rg-dashco"
MIN_AZD_VERSION = "1.18.0"

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "tenant_id": {"type": "string", "minLength": 1},
        "subscription_id": {"type": "string", "minLength": 1},
        "location": {"type": "string", "minLength": 1},
        "default_env_name": {"type": "string", "minLength": 1},
        "min_azd_version": {"type": "string", "pattern": r"^\d+\.\d+\.\d+$"},
    },
}


@dataclass(frozen=True)
class DeploymentConfig:
    """Deployment target settings, fixed for the lifetime of a run."""

    tenant_id: str = TENANT_ID
    subscription_id: str = SUBSCRIPTION_ID
    location: str = LOCATION
    default_env_name: str = DEFAULT_ENV_NAME
    min_azd_version: str = MIN_AZD_VERSION

    def to_dict(self) -> Dict[str, str]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentConfig":
        """Create config from dictionary."""
        return cls(**data)


def _read_config_file(config_file: Path) -> Dict[str, Any]:
    if not config_file.exists():
        raise ConfigurationError(f"Configuration file not found: {config_file}")

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse configuration file {config_file}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file {config_file} must contain a mapping"
        )
    return data


def validate_config_data(data: Dict[str, Any]) -> None:
    """Validate raw configuration values against the schema.

    Raises:
        ConfigurationError: listing every violation found
    """
    validator = Draft7Validator(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        details = []
        for error in errors:
            location = ".".join(str(p) for p in error.path) or "<root>"
            details.append(f"{location}: {error.message}")
        raise ConfigurationError(
            "Invalid deployment configuration", hints=details
        )


def load_deployment_config(
    config_file: Optional[Union[str, Path]] = None, **overrides: Optional[str]
) -> DeploymentConfig:
    """
    Build the deployment configuration.

    Values are merged in order: built-in defaults, then the YAML file (if given),
    then keyword overrides whose value is not None.

    Args:
        config_file: Optional YAML file with any of the DeploymentConfig fields
        **overrides: Explicit values, typically from command-line options

    Returns:
        Validated, immutable DeploymentConfig
    """
    data: Dict[str, Any] = DeploymentConfig().to_dict()

    if config_file is not None:
        config_path = Path(config_file)
        logger.debug(f"Loading deployment configuration from {config_path}")
        data.update(_read_config_file(config_path))

    data.update({k: v for k, v in overrides.items() if v is not None})

    validate_config_data(data)
    return DeploymentConfig.from_dict(data)
