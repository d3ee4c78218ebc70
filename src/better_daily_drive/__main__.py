import sys

from .auth import open_spotify_session
from .config import load_settings
from .errors import AuthError, DailyDriveError
from .filters import configure_logging
from .library import LOOKUP_ERRORS
from .sync import build_daily_drive


def main():
    configure_logging()
    print("--- Spotify CLI Initializing ---")
    try:
        settings = load_settings()
        print("--- Starting Authentication Process ---")
        try:
            spotify_session = open_spotify_session(settings)
        except AuthError as e:
            sys.exit(f"{e}\nAuthentication failed. Cannot proceed with API calls.")

        print("\n--- Authentication Successful. Starting Playlist Feature ---")
        build_daily_drive(spotify_session, settings)
    except DailyDriveError as e:
        sys.exit(str(e))
    except LOOKUP_ERRORS as e:
        sys.exit(f"Spotify request failed: {e}\nAborting.")

if __name__ == '__main__':
    main()
    sys.exit(0)
