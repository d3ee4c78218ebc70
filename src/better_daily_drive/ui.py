import re
import select
import sys
import time
from typing import Callable, List, Sequence, TypeVar

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None

Item = TypeVar('Item')

POLL_INTERVAL_SECONDS = 0.1
SETUP_KEYS = {'s', 'S'}


def prompt_client_id() -> str:
    print("\n--- Initial Setup: Spotify Application Credentials ---")
    print("The Client ID is required to connect to Spotify.")
    print("You can get this from your Spotify Developer Dashboard: https://developer.spotify.com/dashboard")
    while True:
        value = input("Please enter your Client ID: ").strip()
        if value:
            return value
        print("Client ID cannot be empty. Please try again.")


def parse_selection(raw_value: str, option_count: int) -> List[int]:
    """
    Turn "1, 3 5" into zero-based indices.
    Non-numbers, out of range numbers and repeats are ignored, input order is kept.
    """
    indices = []
    for token in re.split(r'[,\s]+', raw_value.strip()):
        if not token.isdigit():
            continue
        number = int(token)
        if 1 <= number <= option_count and number - 1 not in indices:
            indices.append(number - 1)
    return indices


def choose_many(options: Sequence[Item], describe: Callable[[Item], str], prompt: str) -> List[Item]:
    for index, option in enumerate(options, start=1):
        print(f"  {index}. {describe(option)}")
    raw_value = input(f"\n{prompt}")
    return [options[i] for i in parse_selection(raw_value, len(options))]


def _read_key_if_ready(timeout: float) -> str:
    ready, _, _ = select.select([sys.stdin], [], [], timeout)
    if not ready:
        return ''
    return sys.stdin.read(1)


def _countdown(timeout_seconds: int, poll: Callable[[float], str]) -> bool:
    checks_per_second = int(round(1 / POLL_INTERVAL_SECONDS))
    for remaining in range(timeout_seconds, 0, -1):
        sys.stdout.write(f"\rCountdown: {remaining}  ")
        sys.stdout.flush()
        for _ in range(checks_per_second):
            if poll(POLL_INTERVAL_SECONDS) in SETUP_KEYS:
                print("\nSetup request detected. Starting interactive setup...")
                return True
    print("\nTimeout reached. Proceeding with saved configuration.")
    return False


def should_run_setup(timeout_seconds: int) -> bool:
    """ count down, returning True if the user pressed S to rerun setup """
    print("\n--- Auto-Run Check ---")
    print(f"A saved configuration was found. Auto-running in {timeout_seconds} seconds (default action).")
    print("Press 'S' or 's' now to abort and start interactive Setup.")

    if not sys.stdin.isatty() or termios is None or tty is None:
        def _sleep(interval: float) -> str:
            time.sleep(interval)
            return ''
        return _countdown(timeout_seconds, _sleep)

    fd = sys.stdin.fileno()
    old_attrs = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        return _countdown(timeout_seconds, _read_key_if_ready)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_attrs)
