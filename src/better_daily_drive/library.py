import logging
from typing import Any, Dict, List, Optional, Sequence

import requests
import spotipy

from .type import SpotifyEpisode, SpotifyID, SpotifyPlaylist, SpotifySavedShow, SpotifySession, SpotifyShow, SpotifyURI

logger = logging.getLogger(__name__)

# errors that mean "this one item could not be resolved" rather than "stop the run"
LOOKUP_ERRORS = (spotipy.SpotifyException, requests.exceptions.RequestException)


def fetch_all_pages(spotify_session: SpotifySession, first_page: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """ follow `next` links from a paging object and return every item """
    items = []
    page = first_page
    while page:
        items.extend(page.get('items') or [])
        page = spotify_session.next(page) if page.get('next') else None
    return items


def get_user_playlists(spotify_session: SpotifySession) -> List[SpotifyPlaylist]:
    playlists = fetch_all_pages(spotify_session, spotify_session.current_user_playlists(limit=50))
    return [p for p in playlists if p]


def find_or_create_playlist(spotify_session: SpotifySession, user_id: str, name: str, description: str) -> Optional[SpotifyID]:
    """ find the user's playlist with the given name (case-insensitive) or create it as private.
    Returns None when neither the lookup nor the creation succeeds. """
    logger.info(f"Searching for destination playlist: '{name}'...")
    try:
        for playlist in get_user_playlists(spotify_session):
            if (playlist.get('name') or '').casefold() == name.casefold():
                logger.info(f"Found existing playlist: {playlist['name']}")
                return playlist['id']

        new_playlist = spotify_session.user_playlist_create(user_id, name, public=False, description=description)
    except LOOKUP_ERRORS as e:
        logger.error(f"Error finding or creating playlist '{name}': {e}")
        return None
    logger.info(f"Created new playlist: {new_playlist['name']}")
    return new_playlist['id']


def get_followed_shows(spotify_session: SpotifySession) -> List[SpotifyShow]:
    saved: List[SpotifySavedShow] = fetch_all_pages(spotify_session, spotify_session.current_user_saved_shows(limit=50))
    shows = [item['show'] for item in saved if item and item.get('show')]
    return sorted(shows, key=lambda show: show.get('name') or '')


def load_shows(spotify_session: SpotifySession, show_ids: Sequence[SpotifyID]) -> List[SpotifyShow]:
    shows = []
    for show_id in show_ids:
        try:
            show = spotify_session.show(show_id)
        except LOOKUP_ERRORS as e:
            logger.warning(f"- Warning: Could not load selected show ID '{show_id}'. It may have been unfollowed. ({e})")
            continue
        if show:
            shows.append(show)
    return shows


def get_latest_episode_uris(spotify_session: SpotifySession, shows: Sequence[SpotifyShow]) -> List[SpotifyURI]:
    """ one URI per show, the most recent episode; shows without one are skipped """
    episode_uris = []
    for show in shows:
        try:
            page = spotify_session.show_episodes(show['id'], limit=1)
        except LOOKUP_ERRORS as e:
            logger.warning(f"- Error fetching episode for {show.get('name')}: {e}")
            continue
        items: List[SpotifyEpisode] = (page or {}).get("items") or []
        latest = next((episode for episode in items if episode), None)
        if latest and latest.get('uri'):
            episode_uris.append(latest['uri'])
            logger.info(f"- Found latest episode from: {show.get('name')}")
    return episode_uris
