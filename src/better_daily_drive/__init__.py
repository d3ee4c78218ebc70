from .auth import TokenLifecycle, open_spotify_session
from .config import Settings, load_settings
from .consolidate import consolidate_tracks
from .credentials import Credential, CredentialStore
from .errors import (
    AuthError,
    ConfigError,
    DailyDriveError,
    EmptyPoolError,
    SetupError,
    SyncError,
)
from .interleave import interleave
from .playlist_config import PlaylistConfig, PlaylistConfigStore
from .spotipy_patch import replace_playlist_contents
from .sync import build_daily_drive

__all__ = [
    "TokenLifecycle",
    "open_spotify_session",
    "Settings",
    "load_settings",
    "consolidate_tracks",
    "Credential",
    "CredentialStore",
    "AuthError",
    "ConfigError",
    "DailyDriveError",
    "EmptyPoolError",
    "SetupError",
    "SyncError",
    "interleave",
    "PlaylistConfig",
    "PlaylistConfigStore",
    "replace_playlist_contents",
    "build_daily_drive",
]
