from typing import List, Sequence

from moodlist.core import Track


def merge_new_tracks(existing: Sequence[Track], incoming: Sequence[Track]) -> List[Track]:
    """
    Return the tracks of `incoming` that are not already in `existing`.

    Incoming order is preserved and a repeated id inside `incoming` is kept
    once. The caller appends the result to the end of `existing`; an empty
    result means the playlist stays as it is.
    """
    seen = {t.id for t in existing}
    new_tracks: List[Track] = []
    for track in incoming:
        if track.id in seen:
            continue
        seen.add(track.id)
        new_tracks.append(track)
    return new_tracks
