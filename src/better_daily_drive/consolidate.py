import logging
import random
from typing import List, Optional, Sequence

from .errors import EmptyPoolError
from .library import LOOKUP_ERRORS, fetch_all_pages
from .type import SpotifyID, SpotifyPlaylistItem, SpotifySession, SpotifyURI

logger = logging.getLogger(__name__)

PLAYLIST_ITEM_TYPES = ('track', 'episode')


def get_track_uris(items: Sequence[SpotifyPlaylistItem]) -> List[SpotifyURI]:
    """ music tracks only; episodes, local gaps and items without a uri are dropped """
    uris = []
    for item in items:
        track = (item or {}).get('track')
        if not track or track.get('type', 'track') != 'track':
            continue
        if track.get('uri'):
            uris.append(track['uri'])
    return uris


def collect_track_pool(spotify_session: SpotifySession, source_playlist_ids: Sequence[SpotifyID]) -> List[SpotifyURI]:
    """ every track uri from every source, in source order, duplicates kept """
    pool = []
    resolved = 0
    logger.info("Fetching all track URIs from source playlists...")
    for playlist_id in source_playlist_ids:
        try:
            playlist = spotify_session.playlist(playlist_id, additional_types=PLAYLIST_ITEM_TYPES)
            items = fetch_all_pages(spotify_session, playlist.get('tracks'))
        except LOOKUP_ERRORS as e:
            logger.warning(f"- Warning: Could not load source playlist ID '{playlist_id}'. It may have been deleted. ({e})")
            continue
        resolved += 1
        uris = get_track_uris(items)
        pool.extend(uris)
        logger.info(f"- Collected {len(uris)} tracks from '{playlist.get('name', playlist_id)}'. Total collected: {len(pool)}")
    logger.info(f"Loaded {resolved} of {len(source_playlist_ids)} music source playlist(s).")
    return pool


def sample_tracks(pool: Sequence[SpotifyURI], max_tracks: int, rng: Optional[random.Random] = None) -> List[SpotifyURI]:
    """ uniform sample without replacement, already in random order """
    rng = rng or random.Random()
    return rng.sample(list(pool), min(len(pool), max_tracks))


def consolidate_tracks(spotify_session: SpotifySession,
                       source_playlist_ids: Sequence[SpotifyID],
                       max_tracks: int = 50,
                       rng: Optional[random.Random] = None) -> List[SpotifyURI]:
    pool = collect_track_pool(spotify_session, source_playlist_ids)
    if not pool:
        raise EmptyPoolError("No music tracks were found in the source playlists. Aborting copy.")
    tracks = sample_tracks(pool, max_tracks, rng)
    logger.info(f"Randomly selected and shuffled {len(tracks)} tracks for final playlist.")
    return tracks
