"""Configuration management.

This module handles:
- The Configuration object passed to the controller
- Loading/saving the user configuration file
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from models.translation import Translation, get_translation

# Configuration file paths
USER_CONFIG_DIR = Path.home() / '.ccu_control'
USER_CONFIG_FILE = USER_CONFIG_DIR / 'config.json'
DEFAULT_CACHE_DIR = USER_CONFIG_DIR / 'cache'

DEFAULT_BASE_URL = 'https://ccu3-webui:2122'


@dataclass
class Configuration:
    """Settings for one controller session."""
    base_url: str = DEFAULT_BASE_URL
    language: str = 'en'
    cache_dir: Path | None = DEFAULT_CACHE_DIR
    verify_ssl: bool = False
    timeout: float = 5.0
    username: str | None = None
    password: str | None = None

    def __post_init__(self):
        self.base_url = self.base_url.rstrip('/')
        if self.cache_dir is not None:
            self.cache_dir = Path(self.cache_dir).expanduser()

    @classmethod
    def from_dict(cls, data: dict) -> 'Configuration':
        """Build a Configuration from a plain dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.cache_dir is not None:
            data['cache_dir'] = str(self.cache_dir)
        return data

    def get_translation(self) -> Translation:
        """Return the translation table for the configured language."""
        return get_translation(self.language)


def load_config() -> dict:
    """Load the user configuration file.

    Returns:
        Dict with the stored settings, empty if no file exists yet
    """
    if USER_CONFIG_FILE.exists():
        with open(USER_CONFIG_FILE, 'r') as f:
            return json.load(f)
    return {}


def save_config(config: dict):
    """Save configuration to file.

    Args:
        config: Configuration dict to save
    """
    USER_CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)

    with open(USER_CONFIG_FILE, 'w') as f:
        json.dump(config, f, indent=2)


def load_configuration(**overrides) -> Configuration:
    """Build a Configuration from the user config file plus explicit overrides.

    Overrides with a value of None are ignored, so CLI options that were not
    given fall back to the stored settings.
    """
    data = load_config()
    data.update({key: value for key, value in overrides.items() if value is not None})
    return Configuration.from_dict(data)
