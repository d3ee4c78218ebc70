# tests/unit/test_sync.py

import random

import pytest
import spotipy

from better_daily_drive.config import Settings
from better_daily_drive.errors import EmptyPoolError, SetupError
from better_daily_drive.playlist_config import PlaylistConfig, PlaylistConfigStore
from better_daily_drive.sync import build_daily_drive, get_playlist_config, run_interactive_setup

from .helpers import make_page, track_item


@pytest.fixture
def settings(tmp_path):
    return Settings(playlist_config_file=tmp_path / "playlist_config.json", countdown_seconds=1)


@pytest.fixture
def store(settings):
    return PlaylistConfigStore(settings.playlist_config_file)


@pytest.fixture
def spotify_session(mock_spotify_session):
    session = mock_spotify_session
    session.current_user.return_value = {"id": "user1", "display_name": "User One"}
    session.current_user_playlists.return_value = make_page([
        {"id": "dest", "name": "better daily drive", "tracks": {"total": 0}},
        {"id": "src1", "name": "Rock", "tracks": {"total": 20}},
        {"id": "src2", "name": "Jazz", "tracks": {"total": 30}},
    ])
    session.current_user_saved_shows.return_value = make_page([
        {"show": {"id": "show2", "name": "Zebra Talk", "publisher": "Z"}},
        {"show": {"id": "show1", "name": "Alpha News", "publisher": "A"}},
    ])
    session.playlist.side_effect = lambda playlist_id, **kwargs: {
        "id": playlist_id,
        "name": playlist_id,
        "tracks": make_page([track_item(f"spotify:track:{playlist_id}-{i}") for i in range(20)]),
    }
    session.show.side_effect = lambda show_id: {"id": show_id, "name": show_id, "publisher": "P"}
    session.show_episodes.side_effect = lambda show_id, limit: make_page([{"uri": f"spotify:episode:{show_id}"}])
    session.playlist_items.return_value = make_page([])
    return session


def test_first_run_collects_selection_and_rebuilds(spotify_session, settings, store, mocker):
    mocker.patch("builtins.input", side_effect=["2, 1, 9", "1"])
    countdown = mocker.patch("better_daily_drive.sync.ui.should_run_setup")

    written = build_daily_drive(spotify_session, settings, store, random.Random(1))

    countdown.assert_not_called()
    # destination matched case-insensitively, never created or offered as a source
    spotify_session.user_playlist_create.assert_not_called()
    assert store.load() == PlaylistConfig(["src2", "src1"], ["show1"])

    added = [uri for c in spotify_session.playlist_add_items.call_args_list for uri in c.args[1]]
    assert written == len(added) == 41
    assert added[1] == "spotify:episode:show1"
    assert all(c.args[0] == "dest" for c in spotify_session.playlist_add_items.call_args_list)


def test_saved_config_auto_runs(spotify_session, settings, store, mocker):
    store.save(PlaylistConfig(["src1"], ["show1", "show2"]))
    mocker.patch("better_daily_drive.sync.ui.should_run_setup", return_value=False)
    prompt = mocker.patch("builtins.input")

    written = build_daily_drive(spotify_session, settings, store)

    prompt.assert_not_called()
    added = [uri for c in spotify_session.playlist_add_items.call_args_list for uri in c.args[1]]
    assert written == 22
    assert added[1] == "spotify:episode:show1"
    assert added[8] == "spotify:episode:show2"
    assert sorted(u for u in added if "track" in u) == sorted(f"spotify:track:src1-{i}" for i in range(20))


def test_missing_destination_is_created(spotify_session, settings, store, mocker):
    spotify_session.current_user_playlists.return_value = make_page([{"id": "src1", "name": "Rock"}])
    spotify_session.user_playlist_create.return_value = {"id": "new", "name": "Better Daily Drive"}
    store.save(PlaylistConfig(["src1"]))
    mocker.patch("better_daily_drive.sync.ui.should_run_setup", return_value=False)

    build_daily_drive(spotify_session, settings, store)

    args, kwargs = spotify_session.user_playlist_create.call_args
    assert args == ("user1", "Better Daily Drive")
    assert kwargs["public"] is False
    assert spotify_session.playlist_add_items.call_args.args[0] == "new"


def test_no_episodes_writes_tracks_only(spotify_session, settings, store, mocker):
    store.save(PlaylistConfig(["src1"], ["show1"]))
    mocker.patch("better_daily_drive.sync.ui.should_run_setup", return_value=False)
    spotify_session.show_episodes.side_effect = lambda show_id, limit: make_page([])

    assert build_daily_drive(spotify_session, settings, store) == 20


def test_empty_pool_aborts_before_touching_destination(spotify_session, settings, store, mocker):
    store.save(PlaylistConfig(["src1"]))
    mocker.patch("better_daily_drive.sync.ui.should_run_setup", return_value=False)
    spotify_session.playlist.side_effect = lambda playlist_id, **kwargs: {"id": playlist_id, "tracks": make_page([])}

    with pytest.raises(EmptyPoolError):
        build_daily_drive(spotify_session, settings, store)
    spotify_session.playlist_add_items.assert_not_called()
    spotify_session.playlist_remove_all_occurrences_of_items.assert_not_called()


def test_setup_without_sources_aborts(spotify_session, mocker):
    mocker.patch("builtins.input", return_value="nothing")
    with pytest.raises(SetupError):
        run_interactive_setup(spotify_session, "dest")


def test_setup_without_followed_shows_is_fine(spotify_session, mocker):
    spotify_session.current_user_saved_shows.return_value = make_page([])
    mocker.patch("builtins.input", return_value="1")
    assert run_interactive_setup(spotify_session, "dest") == PlaylistConfig(["src1"], [])


def test_pressing_s_reruns_setup(spotify_session, settings, store, mocker):
    store.save(PlaylistConfig(["src1"]))
    mocker.patch("better_daily_drive.sync.ui.should_run_setup", return_value=True)
    mocker.patch("builtins.input", side_effect=["2", ""])

    config = get_playlist_config(spotify_session, settings, store, "dest")

    assert config == PlaylistConfig(["src2"], [])
    assert store.load() == config


def test_destination_create_failure_aborts(spotify_session, settings, store):
    spotify_session.current_user_playlists.return_value = make_page([{"id": "src1", "name": "Rock"}])
    spotify_session.user_playlist_create.side_effect = spotipy.SpotifyException(403, -1, "Forbidden")

    with pytest.raises(SetupError, match="Could not find or create the target playlist"):
        build_daily_drive(spotify_session, settings, store)
    spotify_session.playlist_add_items.assert_not_called()


def test_rejected_token_on_profile_lookup_aborts(spotify_session, settings, store):
    spotify_session.current_user.side_effect = spotipy.SpotifyException(401, -1, "The access token expired")

    with pytest.raises(SetupError, match="access token expired"):
        build_daily_drive(spotify_session, settings, store)
    spotify_session.current_user_playlists.assert_not_called()


@pytest.mark.parametrize("listing", ["current_user_playlists", "current_user_saved_shows"])
def test_setup_listing_failure_aborts(spotify_session, mocker, listing):
    getattr(spotify_session, listing).side_effect = spotipy.SpotifyException(500, -1, "boom")
    mocker.patch("builtins.input", return_value="1")

    with pytest.raises(SetupError):
        run_interactive_setup(spotify_session, "dest")
