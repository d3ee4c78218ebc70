from dataclasses import dataclass, field
from typing import Iterable, List

from .store import CorruptRecord, JsonFileStore
from .type import PlaylistConfigFile


def unique(ids: Iterable[str]) -> List[str]:
    """ drop empty and repeated ids, keeping first-seen order """
    output = []
    seen = set()
    for item in ids:
        if item and item not in seen:
            output.append(item)
            seen.add(item)
    return output


@dataclass
class PlaylistConfig:
    source_playlist_ids: List[str] = field(default_factory=list)
    show_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.source_playlist_ids = unique(self.source_playlist_ids)
        self.show_ids = unique(self.show_ids)


def _id_list(payload: dict, key: str) -> List[str]:
    value = payload.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
        raise CorruptRecord(f"'{key}' must be a list of strings")
    return value


class PlaylistConfigStore(JsonFileStore[PlaylistConfig]):
    description = 'configuration'

    def parse(self, payload) -> PlaylistConfig:
        if not isinstance(payload, dict):
            raise CorruptRecord("configuration must be a JSON object")
        config = PlaylistConfig(
            source_playlist_ids=_id_list(payload, 'sourcePlaylistIds'),
            show_ids=_id_list(payload, 'showIds'),
        )
        if not config.source_playlist_ids:
            raise CorruptRecord("configuration has no source playlists")
        return config

    def dump(self, config: PlaylistConfig) -> PlaylistConfigFile:
        return {
            'sourcePlaylistIds': list(config.source_playlist_ids),
            'showIds': list(config.show_ids),
        }
