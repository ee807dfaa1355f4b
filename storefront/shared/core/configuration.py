"""
Configuration Management for the Storefront

Centralized configuration with a 3-tier precedence hierarchy:
environment → user file → system defaults.

The only behavioural knobs are the three simulated delays (catalog load,
checkout submission, confirmation display); everything else is presentation.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class DelayConfig(BaseModel):
    """Simulated latencies, in milliseconds"""
    model_config = ConfigDict(extra='forbid')

    catalog_load_ms: int = Field(default=1000, ge=0, le=600_000, description="Catalog fetch latency (D1)")
    checkout_submit_ms: int = Field(default=2000, ge=0, le=600_000, description="Order submission latency (D2)")
    confirmation_ms: int = Field(default=3000, ge=0, le=600_000, description="Confirmation display time (D3)")

    @property
    def catalog_load(self) -> float:
        return self.catalog_load_ms / 1000

    @property
    def checkout_submit(self) -> float:
        return self.checkout_submit_ms / 1000

    @property
    def confirmation(self) -> float:
        return self.confirmation_ms / 1000


class UIConfig(BaseModel):
    """Console presentation settings"""
    model_config = ConfigDict(extra='forbid')

    title: str = Field(default="Serverless Store", description="Header title")
    currency_symbol: str = Field(default="$", max_length=4, description="Prefix for prices")
    grid_columns: int = Field(default=3, ge=1, le=6, description="Products per row in the grid")


class StorefrontConfig(BaseModel):
    """Complete storefront configuration"""
    model_config = ConfigDict(extra='forbid')

    delays: DelayConfig = Field(default_factory=DelayConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    schema_version: int = Field(default=1, description="Configuration schema version")


# Environment variable -> (section, key, converter)
ENV_OVERRIDES = {
    'STOREFRONT_CATALOG_LOAD_MS': ('delays', 'catalog_load_ms', int),
    'STOREFRONT_CHECKOUT_SUBMIT_MS': ('delays', 'checkout_submit_ms', int),
    'STOREFRONT_CONFIRMATION_MS': ('delays', 'confirmation_ms', int),
    'STOREFRONT_TITLE': ('ui', 'title', str),
    'STOREFRONT_CURRENCY': ('ui', 'currency_symbol', str),
}


class ConfigManager:
    """Merges defaults, YAML files and environment overrides."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path(__file__).parent.parent / "config" / "settings"
        self._system_config: Optional[StorefrontConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file; a missing file is an empty mapping"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _load_system_defaults(self) -> StorefrontConfig:
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")
            try:
                self._system_config = StorefrontConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = StorefrontConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, convert) in ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value is None:
                continue
            try:
                converted = convert(value)
            except ValueError:
                logger.warning(f"Ignoring {env_key}={value!r}: not a valid {convert.__name__}")
                continue
            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> StorefrontConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return StorefrontConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}")
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return StorefrontConfig()

    def reload_config(self) -> None:
        """Clear cached configurations and reload from files"""
        self._system_config = None
        self._user_config = None


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> StorefrontConfig:
    """Get current storefront configuration"""
    return get_config_manager().get_config(validation_level)
