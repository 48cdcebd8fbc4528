"""
Configuration loader for the savings calendar.

Loads settings from a YAML config file.
"""

import datetime
import os

import yaml

from .storage import STORAGE_KEY

DEFAULT_STORE_FILE = 'data/ahorro.json'
VALID_DECIMAL_SEPARATORS = ('.', ',')


def load_settings(config_dir, settings_file='settings.yaml'):
    """Load main settings from settings.yaml (or specified file)."""
    settings_path = os.path.join(config_dir, settings_file)

    if not os.path.exists(settings_path):
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with open(settings_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def resolve_store_path(config_dir, store_file):
    """Resolve the store file relative to the config directory's parent."""
    if os.path.isabs(store_file):
        return store_file
    return os.path.normpath(os.path.join(os.path.dirname(config_dir), store_file))


def check_currency_format(currency_format):
    """Validate a currency format string with a single {amount} placeholder."""
    if not isinstance(currency_format, str) or '{amount}' not in currency_format:
        raise ValueError(
            f"currency_format must be text containing '{{amount}}', got {currency_format!r}"
        )
    try:
        currency_format.format(amount='0.00')
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(f"currency_format {currency_format!r} is invalid: {e!r}")
    return currency_format


def load_config(config_dir, settings_file='settings.yaml'):
    """Load all configuration values.

    Args:
        config_dir: Path to config directory containing settings.yaml.
        settings_file: Name of the settings file to load (default: settings.yaml)

    Returns:
        dict with all configuration values
    """
    config_dir = os.path.abspath(config_dir)

    if not os.path.isdir(config_dir):
        raise FileNotFoundError(f"Config directory not found: {config_dir}")

    config = load_settings(config_dir, settings_file)
    if not isinstance(config, dict):
        raise ValueError(f"{settings_file} must contain a mapping of settings")

    config['year'] = config.get('year') or datetime.datetime.now().year

    config['store_file'] = resolve_store_path(
        config_dir, str(config.get('store_file') or DEFAULT_STORE_FILE)
    )
    config['storage_key'] = str(config.get('storage_key') or STORAGE_KEY)

    # Currency format for display (default: USD)
    config['currency_format'] = check_currency_format(
        config.get('currency_format', '${amount}')
    )

    decimal_separator = str(config.get('decimal_separator', '.'))
    if decimal_separator not in VALID_DECIMAL_SEPARATORS:
        raise ValueError(
            f"decimal_separator must be '.' or ',', got '{decimal_separator}'"
        )
    config['decimal_separator'] = decimal_separator

    # Store config dir for reference
    config['_config_dir'] = config_dir

    return config
