"""Configuration management."""

import copy
import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file, layered over the defaults."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            loaded = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            loaded = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    return merge_config(get_default_config(), loaded or {})


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base."""
    merged = copy.deepcopy(base)

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value

    return merged


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'scoring': {
            'streak_threshold': 50,
            'consistency_threshold': 50,
        },
        'trend': {
            'improving_threshold': 5,
            'declining_threshold': -10,
        },
        'late_logging': {
            'grace_days': 1,
        },
        'windows': {
            'all_time_days': 365,
            'streak_lookback_days': 400,
        },
        'generator': {
            'history_days': 60,
            'goal_count': 2,
            'tasks_per_goal': 2,
            'foundation_tasks': 1,
            'completion_rate': 0.75,
            'late_log_rate': 0.1,
        },
    }


def get_setting(config: Optional[Dict[str, Any]], section: str, key: str) -> Any:
    """Read section.key from config, falling back to the default value."""
    if config:
        value = config.get(section, {}).get(key)
        if value is not None:
            return value
    return get_default_config()[section][key]
