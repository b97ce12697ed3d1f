"""
Configuration management for TalkRange
"""

import math
import os
import yaml
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from .exceptions import ConfigurationError, ValidationError
from .types import CULTURE_MODES, STRATEGY_MODES, Profile


def _env_number(name: str, fallback: float) -> float:
    """Read a numeric environment variable, falling back when missing or not finite"""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return fallback
    try:
        value = float(raw)
    except ValueError:
        return fallback
    return value if math.isfinite(value) else fallback


class Config:
    """Configuration manager with environment-specific settings"""

    def __init__(self, config_path: Optional[str] = None, environment: str = "default"):
        self.environment = environment
        self._config = self._load_config(config_path)

    def _load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load configuration from environment defaults and YAML files"""

        load_dotenv()

        # Default configuration
        default_config = {
            'scoring': {
                'weights': {
                    'time': _env_number('TALK_RANGE_WEIGHT_TIME', 0.3),
                    'relationship': _env_number('TALK_RANGE_WEIGHT_REL', 0.3),
                    'task': _env_number('TALK_RANGE_WEIGHT_TASK', 0.2),
                    'future': _env_number('TALK_RANGE_WEIGHT_FUTURE', 0.2),
                },
                'strategy': os.getenv('TALK_RANGE_MODE', 'gto'),
            },
            'defaults': {
                'culture': os.getenv('TALK_RANGE_CULTURE', 'balanced'),
                'profile': {
                    'relationship': 'peer',
                    'task_urgency': _env_number('TALK_RANGE_PROFILE_TASK', 0.4),
                    'future_importance': _env_number('TALK_RANGE_PROFILE_FUTURE', 0.6),
                    'tolerance': _env_number('TALK_RANGE_PROFILE_TOLERANCE', 0.5),
                },
            },
            'server': {
                'host': os.getenv('TALK_RANGE_HOST', '0.0.0.0'),
                'port': int(_env_number('PORT', 3333)),
            },
            'logging': {
                'level': os.getenv('TALK_RANGE_LOG_LEVEL', 'WARNING'),
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            }
        }

        # Try to load from file if provided
        if config_path:
            config_file = Path(config_path)
            if not config_file.exists():
                raise ConfigurationError(f"Config file not found: {config_file}")
        else:
            # Look for config files in standard locations
            possible_paths = [
                Path('config') / f'{self.environment}.yaml',
                Path('config') / 'default.yaml',
            ]

            config_file = None
            for path in possible_paths:
                if path.exists():
                    config_file = path
                    break

        if config_file and config_file.exists():
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    file_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {config_file}: {e}")
            if file_config:
                if not isinstance(file_config, dict):
                    raise ConfigurationError(f"Config file {config_file} must contain a mapping")
                default_config = self._deep_merge(default_config, file_config)

        return default_config

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value using dot notation (e.g., 'scoring.weights.time')"""
        keys = path.split('.')
        value = self._config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    @property
    def server(self) -> Dict[str, Any]:
        """HTTP server configuration"""
        return self.get('server', {})


@dataclass(frozen=True)
class WeightConfig:
    """Weights of the linear EV terms"""
    time: float = 0.3
    relationship: float = 0.3
    task: float = 0.2
    future: float = 0.2


@dataclass(frozen=True)
class Settings:
    """Immutable scoring settings resolved once at startup"""
    weights: WeightConfig = field(default_factory=WeightConfig)
    default_culture: str = "balanced"
    default_profile: Profile = field(default_factory=Profile)
    strategy: str = "gto"

    @classmethod
    def from_config(cls, config: Config) -> "Settings":
        weights = {}
        for name in ('time', 'relationship', 'task', 'future'):
            try:
                value = float(config.get(f'scoring.weights.{name}', getattr(WeightConfig, name)))
            except (TypeError, ValueError):
                raise ConfigurationError(f"Weight '{name}' must be a number")
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"Weight '{name}' must be a non-negative number, got {value}")
            weights[name] = value

        culture = str(config.get('defaults.culture', 'balanced')).lower()
        if culture not in CULTURE_MODES:
            raise ConfigurationError(f"Unknown culture mode '{culture}', expected one of {CULTURE_MODES}")

        strategy = str(config.get('scoring.strategy', 'gto')).lower()
        if strategy not in STRATEGY_MODES:
            raise ConfigurationError(f"Unknown strategy mode '{strategy}', expected one of {STRATEGY_MODES}")

        profile_cfg = config.get('defaults.profile', {}) or {}
        try:
            profile = Profile().merged(profile_cfg)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid default profile: {e}")

        return cls(
            weights=WeightConfig(**weights),
            default_culture=culture,
            default_profile=profile,
            strategy=strategy,
        )


def load_settings(config_path: Optional[str] = None, environment: str = "default") -> Settings:
    """Build the frozen settings from environment variables and optional YAML"""
    return Settings.from_config(Config(config_path, environment))
