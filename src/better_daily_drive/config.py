import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = 'config.yml'

SPOTIFY_SCOPES = [
    'user-read-email',
    'user-library-read',
    'user-read-private',
    'playlist-read-private',
    'user-follow-read',
    'playlist-modify-public',
    'playlist-modify-private',
]


@dataclass
class Settings:
    """
    Tunables for a single run.
    Every component takes what it needs from here instead of module constants.
    """
    target_playlist_name: str = 'Better Daily Drive'
    max_tracks: int = 50
    interleave_interval: int = 5
    batch_size: int = 100
    countdown_seconds: int = 10
    auth_timeout_seconds: int = 120
    refresh_margin_seconds: int = 5 * 60
    callback_host: str = '127.0.0.1'
    callback_port: int = 58739
    callback_path: str = '/callback'
    credentials_file: Path = Path('spotify_auth_data.json')
    playlist_config_file: Path = Path('playlist_config.json')
    requests_timeout: int = 10
    open_browser: bool = True
    scopes: List[str] = field(default_factory=lambda: list(SPOTIFY_SCOPES))

    @property
    def redirect_uri(self) -> str:
        return f"http://{self.callback_host}:{self.callback_port}{self.callback_path}"


_PATH_KEYS = {'credentials_file', 'playlist_config_file'}


def _coerce(key: str, value, default):
    if key in _PATH_KEYS:
        if not isinstance(value, str) or not value:
            raise ConfigError(f"'{key}' must be a non-empty path string")
        return Path(value)
    # bool is a subclass of int, so check it first
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigError(f"'{key}' must be true or false")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"'{key}' must be a positive integer")
        return value
    if isinstance(default, str):
        if not isinstance(value, str) or not value:
            raise ConfigError(f"'{key}' must be a non-empty string")
        return value
    if isinstance(default, list):
        if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
            raise ConfigError(f"'{key}' must be a list of strings")
        return list(value)
    return value


def load_settings(path=DEFAULT_CONFIG_FILE) -> Settings:
    """ Read overrides from a YAML file, falling back to defaults when it does not exist """
    settings = Settings()
    try:
        with open(path, 'r') as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        return settings
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse settings file '{path}': {e}") from e

    if raw is None:
        return settings
    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file '{path}' must contain a mapping")

    known = {f.name: f for f in dataclasses.fields(Settings)}
    overrides = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning(f"Ignoring unknown setting '{key}' in {path}")
            continue
        overrides[key] = _coerce(key, value, getattr(settings, key))
    logger.debug(f"Loaded {len(overrides)} setting(s) from {path}")
    return dataclasses.replace(settings, **overrides)
