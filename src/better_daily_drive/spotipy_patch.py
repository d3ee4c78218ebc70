import logging
from typing import List, Sequence

from tqdm import tqdm

from .errors import SyncError
from .library import LOOKUP_ERRORS, fetch_all_pages
from .type import SpotifyID, SpotifySession, SpotifyURI

logger = logging.getLogger(__name__)

# Spotify accepts at most 100 items per add/remove request
MAX_BATCH_SIZE = 100


def _chunks(items: Sequence, chunk_size: int):
    for offset in range(0, len(items), chunk_size):
        yield items[offset:offset + chunk_size]


def get_all_playlist_uris(spotify_session: SpotifySession, playlist_id: SpotifyID) -> List[SpotifyURI]:
    """ uris of every track and episode currently in the playlist """
    first_page = spotify_session.playlist_items(playlist_id, additional_types=('track', 'episode'))
    items = fetch_all_pages(spotify_session, first_page)
    return [item['track']['uri'] for item in items if item and item.get('track') and item['track'].get('uri')]


def clear_spotify_playlist(spotify_session: SpotifySession, playlist_id: SpotifyID, chunk_size: int = MAX_BATCH_SIZE) -> int:
    try:
        uris = get_all_playlist_uris(spotify_session, playlist_id)
    except LOOKUP_ERRORS as e:
        raise SyncError(f"Could not read destination playlist contents: {e}") from e
    if not uris:
        logger.info("Destination playlist was already empty.")
        return 0

    chunk_size = min(chunk_size, MAX_BATCH_SIZE)
    with tqdm(desc="Erasing existing items from destination playlist", total=len(uris)) as progress:
        for chunk in _chunks(uris, chunk_size):
            try:
                spotify_session.playlist_remove_all_occurrences_of_items(playlist_id, chunk)
            except LOOKUP_ERRORS as e:
                raise SyncError(f"Removing items from destination playlist failed: {e}") from e
            progress.update(len(chunk))
    logger.info(f"Removed {len(uris)} old items.")
    return len(uris)


def add_multiple_items_to_playlist(spotify_session: SpotifySession, playlist_id: SpotifyID, uris: Sequence[SpotifyURI], chunk_size: int = MAX_BATCH_SIZE) -> int:
    """ append in order; batches are sent one after another so order carries across them """
    chunk_size = min(chunk_size, MAX_BATCH_SIZE)
    added = 0
    with tqdm(desc="Adding new items to destination playlist", total=len(uris)) as progress:
        for chunk in _chunks(list(uris), chunk_size):
            try:
                spotify_session.playlist_add_items(playlist_id, chunk)
            except LOOKUP_ERRORS as e:
                raise SyncError(f"Adding items to destination playlist failed after {added} items: {e}") from e
            added += len(chunk)
            progress.update(len(chunk))
    return added


def replace_playlist_contents(spotify_session: SpotifySession, playlist_id: SpotifyID, uris: Sequence[SpotifyURI], chunk_size: int = MAX_BATCH_SIZE) -> int:
    logger.info("\nClearing existing content from destination playlist...")
    clear_spotify_playlist(spotify_session, playlist_id, chunk_size)
    logger.info(f"Adding {len(uris)} items to destination playlist...")
    added = add_multiple_items_to_playlist(spotify_session, playlist_id, uris, chunk_size)
    logger.info(f"Successfully updated playlist with {added} items.")
    return added
