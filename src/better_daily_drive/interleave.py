from typing import List, Sequence

from .type import SpotifyURI


def interleave(tracks: Sequence[SpotifyURI], episodes: Sequence[SpotifyURI], interval: int = 5) -> List[SpotifyURI]:
    """
    Merge episodes into the track list.

    The first episode goes right after the first track. After that an episode
    follows track i (0-based) whenever i-1 is a positive multiple of `interval`,
    so with the default interval they land after tracks 1, 7, 12, 17, ...
    Episodes are used once each, in order; surplus episodes are dropped and
    tracks never are.
    """
    if not tracks:
        return []
    if not episodes:
        return list(tracks)

    output = [tracks[0]]
    remaining = iter(episodes)
    first = next(remaining, None)
    if first is not None:
        output.append(first)

    for i in range(1, len(tracks)):
        output.append(tracks[i])
        if (i - 1) > 0 and (i - 1) % interval == 0:
            episode = next(remaining, None)
            if episode is not None:
                output.append(episode)
    return output
