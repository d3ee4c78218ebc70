from .config import CredentialFile, PlaylistConfigFile
from .spotify import (
    SpotifyEpisode,
    SpotifyID,
    SpotifyPlaylist,
    SpotifyPlaylistItem,
    SpotifySavedShow,
    SpotifySession,
    SpotifyShow,
    SpotifyURI,
)

__all__ = [
    "CredentialFile",
    "PlaylistConfigFile",
    "SpotifyEpisode",
    "SpotifyID",
    "SpotifyPlaylist",
    "SpotifyPlaylistItem",
    "SpotifySavedShow",
    "SpotifySession",
    "SpotifyShow",
    "SpotifyURI",
]
