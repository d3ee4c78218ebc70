from spotipy import Spotify
from typing import TypedDict, List, Dict, Literal, Optional


SpotifyID = str
SpotifyURI = str
SpotifySession = Spotify


class SpotifyImage(TypedDict):
    url: str
    height: int
    width: int


class SpotifyUser(TypedDict):
    id: str
    display_name: Optional[str]


class SpotifyTrackRef(TypedDict):
    href: str
    total: int


class SpotifyPlaylist(TypedDict):
    collaborative: bool
    description: Optional[str]
    external_urls: Dict[str, str]
    href: str
    id: str
    images: List[SpotifyImage]
    name: str
    owner: SpotifyUser
    public: Optional[bool]
    snapshot_id: str
    tracks: SpotifyTrackRef
    type: Literal["playlist"]
    uri: str


class SpotifyPlayable(TypedDict):
    id: str
    name: str
    type: Literal["track", "episode"]
    uri: str


class SpotifyPlaylistItem(TypedDict):
    added_at: str
    is_local: bool
    track: Optional[SpotifyPlayable]


class SpotifyShow(TypedDict):
    id: str
    name: str
    publisher: str
    total_episodes: int
    type: Literal["show"]
    uri: str


class SpotifySavedShow(TypedDict):
    added_at: str
    show: SpotifyShow


class SpotifyEpisode(TypedDict):
    id: str
    name: str
    release_date: str
    type: Literal["episode"]
    uri: str
