#!/usr/bin/env python3

import logging
import random
from typing import List, Optional

from . import ui
from .config import Settings
from .consolidate import consolidate_tracks
from .errors import SetupError
from .interleave import interleave
from .library import (
    LOOKUP_ERRORS,
    find_or_create_playlist,
    get_followed_shows,
    get_latest_episode_uris,
    get_user_playlists,
    load_shows,
)
from .playlist_config import PlaylistConfig, PlaylistConfigStore
from .spotipy_patch import replace_playlist_contents
from .type import SpotifyID, SpotifyPlaylist, SpotifySession, SpotifyShow

logger = logging.getLogger(__name__)


def select_source_playlists(spotify_session: SpotifySession, destination_id: SpotifyID) -> List[SpotifyPlaylist]:
    candidates = [p for p in get_user_playlists(spotify_session) if p['id'] != destination_id]
    if not candidates:
        print("No other playlists available to use as a source.")
        return []
    print(f"Found {len(candidates)} potential source playlists. Select the numbers (e.g., 1,3,5) "
          "of the playlists you want to consolidate tracks from:")
    return ui.choose_many(
        candidates,
        lambda p: f"{p['name']} (Tracks: {(p.get('tracks') or {}).get('total', '?')})",
        "Enter playlist numbers, separated by commas: ",
    )


def select_shows(spotify_session: SpotifySession) -> List[SpotifyShow]:
    shows = get_followed_shows(spotify_session)
    if not shows:
        print("You are not following any shows. Cannot interleave podcasts.")
        return []
    print(f"\nFound {len(shows)} followed shows. Enter the numbers (1-{len(shows)}) of the shows you want "
          "to include, separated by commas (e.g., 1,3,5):")
    return ui.choose_many(
        shows,
        lambda s: f"{s['name']} ({s.get('publisher', '')})",
        "Enter show numbers, separated by commas: ",
    )


def run_interactive_setup(spotify_session: SpotifySession, destination_id: SpotifyID) -> PlaylistConfig:
    print("\n--- Step 2: Select Source Playlists (Music) ---")
    try:
        playlists = select_source_playlists(spotify_session, destination_id)
    except LOOKUP_ERRORS as e:
        raise SetupError(f"Could not list your playlists: {e}") from e
    if not playlists:
        raise SetupError("No source playlists selected. Aborting.")

    print("\n--- Step 3: Select Podcasts for Interleaving ---")
    try:
        shows = select_shows(spotify_session)
    except LOOKUP_ERRORS as e:
        raise SetupError(f"Could not list your followed shows: {e}") from e

    return PlaylistConfig(
        source_playlist_ids=[p['id'] for p in playlists],
        show_ids=[s['id'] for s in shows],
    )


def get_playlist_config(spotify_session: SpotifySession, settings: Settings, store: PlaylistConfigStore, destination_id: SpotifyID) -> PlaylistConfig:
    """ saved configuration, unless there is none or the user asks for setup during the countdown """
    config = store.load()
    if config is None:
        logger.info("No saved configuration found. Starting interactive setup.")
    elif not ui.should_run_setup(settings.countdown_seconds):
        return config

    config = run_interactive_setup(spotify_session, destination_id)
    store.save(config)
    return config


def build_daily_drive(spotify_session: SpotifySession,
                      settings: Settings,
                      store: Optional[PlaylistConfigStore] = None,
                      rng: Optional[random.Random] = None) -> int:
    """ rebuild the destination playlist and return how many items were written """
    store = store or PlaylistConfigStore(settings.playlist_config_file)

    try:
        profile = spotify_session.current_user()
    except LOOKUP_ERRORS as e:
        raise SetupError(f"Could not load your Spotify profile: {e}") from e
    user_id = profile['id']
    logger.info(f"\nSuccess! Welcome, {profile.get('display_name') or user_id}! (User ID: {user_id})")

    logger.info("\n--- Step 1: Destination Playlist Setup ---")
    description = (f"Curated playlist of {settings.max_tracks} tracks interleaved with podcasts. "
                   "Created by Better Daily Drive.")
    destination_id = find_or_create_playlist(spotify_session, user_id, settings.target_playlist_name, description)
    if not destination_id:
        raise SetupError("FATAL: Could not find or create the target playlist. Aborting.")

    config = get_playlist_config(spotify_session, settings, store, destination_id)
    shows = load_shows(spotify_session, config.show_ids)
    logger.info(f"\nConfigured {len(config.source_playlist_ids)} music source playlist(s); loaded {len(shows)} show(s).")

    logger.info(f"\n--- Step 5: Curating and Copying tracks to '{settings.target_playlist_name}' ---")
    tracks = consolidate_tracks(spotify_session, config.source_playlist_ids, settings.max_tracks, rng)
    episodes = get_latest_episode_uris(spotify_session, shows)
    if episodes:
        final_uris = interleave(tracks, episodes, settings.interleave_interval)
        logger.info(f"Interleaved {len(final_uris) - len(tracks)} unique podcast episodes with {len(tracks)} songs.")
    else:
        logger.info("No podcast episodes available. Using music tracks only.")
        final_uris = list(tracks)

    written = replace_playlist_contents(spotify_session, destination_id, final_uris, settings.batch_size)
    logger.info("\n--- Operation Complete ---")
    logger.info(f"Successfully consolidated and curated the final playlist '{settings.target_playlist_name}'.")
    return written
