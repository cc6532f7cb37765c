import time

# --- Event leaderboard cache ---

LEADERBOARD_CACHE_TTL = 10.0  # seconds

# event_id -> (rendered leaderboard dict, stored_at)
LEADERBOARD_CACHE: dict = {}


def get_cached_leaderboard(event_id):
    """
    Rendered leaderboard for one event, or None when missing or older
    than LEADERBOARD_CACHE_TTL (stale entries are dropped on read).
    """
    entry = LEADERBOARD_CACHE.get(event_id)
    if not entry:
        return None

    data, stored_at = entry
    if (time.time() - stored_at) > LEADERBOARD_CACHE_TTL:
        LEADERBOARD_CACHE.pop(event_id, None)
        return None

    return data


def set_cached_leaderboard(event_id, data):
    """Keep the JSON-ready leaderboard for `event_id` until the TTL runs out."""
    LEADERBOARD_CACHE[event_id] = (data, time.time())


def invalidate_leaderboard_cache():
    """
    Drop every event's cached leaderboard.

    Called after any score submission, verification change or event join.
    """
    LEADERBOARD_CACHE.clear()
