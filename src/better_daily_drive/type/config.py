from typing import TypedDict, List, Optional


class CredentialFile(TypedDict):
    clientId: str
    accessToken: str
    refreshToken: str
    tokenType: str
    scope: List[str]
    expiresAt: Optional[str]


class PlaylistConfigFile(TypedDict):
    sourcePlaylistIds: List[str]
    showIds: List[str]

