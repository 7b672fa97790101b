#!/usr/bin/env python3
"""Configuration loader for code-pusher."""

import os
import json
import math
from pathlib import Path
from typing import Dict, Any
from utils.logger import get_logger

logger = get_logger(__name__)

HOME_ENV = 'CODE_PUSHER_HOME'
DEFAULT_HOME = '~/.code-pusher'


def get_home_dir() -> Path:
    """Directory holding config.json, from CODE_PUSHER_HOME or ~/.code-pusher."""
    return Path(os.environ.get(HOME_ENV) or DEFAULT_HOME).expanduser()


def load_config() -> Dict[str, Any]:
    """Load code-pusher configuration.

    Returns:
        Configuration dictionary
    """
    home_dir = get_home_dir()

    user_config_path = home_dir / 'config.json'
    example_config_path = home_dir / 'example-config.json'

    config = _get_default_config()

    # Prioritize user config, fall back to example config
    config_path = user_config_path if user_config_path.exists() else example_config_path

    if config_path.exists():
        try:
            with open(config_path, 'r') as f:
                _merge(config, json.load(f))
            logger.info(f"Loaded config from {config_path.name}")
        except (IOError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
    else:
        logger.debug(f"No config file in {home_dir}, using defaults")

    return _validate(config)


def _merge(config: Dict[str, Any], loaded: Any) -> None:
    """Merge loaded values over defaults, one level into sections."""
    if not isinstance(loaded, dict):
        logger.warning("Config file does not contain a JSON object, ignoring it")
        return

    for key, value in loaded.items():
        if isinstance(config.get(key), dict) and isinstance(value, dict):
            config[key].update(value)
        else:
            config[key] = value


def _validate(config: Dict[str, Any]) -> Dict[str, Any]:
    """Replace invalid values with defaults.

    Remote and branch must be non-empty strings, the interval a finite
    positive number.
    """
    defaults = _get_default_config()

    for section in ('git_config', 'schedule_config'):
        if not isinstance(config.get(section), dict):
            logger.warning(f"Invalid {section}, using defaults")
            config[section] = defaults[section]

    git_config = config['git_config']
    for key in ('remote_name', 'branch_name'):
        value = git_config.get(key)
        if not isinstance(value, str) or not value.strip():
            logger.warning(f"Invalid git_config.{key} {value!r}, using {defaults['git_config'][key]!r}")
            git_config[key] = defaults['git_config'][key]
        else:
            git_config[key] = value.strip()

    interval = config['schedule_config'].get('interval_minutes')
    if (isinstance(interval, bool) or not isinstance(interval, (int, float))
            or not math.isfinite(interval) or interval <= 0):
        logger.warning(f"Invalid schedule_config.interval_minutes {interval!r}, using default")
        config['schedule_config']['interval_minutes'] = defaults['schedule_config']['interval_minutes']

    if not isinstance(config.get('log_dir'), str) or not config['log_dir'].strip():
        config['log_dir'] = defaults['log_dir']

    return config


def _get_default_config() -> Dict[str, Any]:
    """Get default configuration.

    Returns:
        Default configuration dictionary
    """
    return {
        'log_dir': DEFAULT_HOME,
        'log_per_workspace': False,
        'git_config': {
            'remote_name': 'origin',
            'branch_name': 'master',
            'push_after_commit': False
        },
        'schedule_config': {
            'interval_minutes': 30
        }
    }
