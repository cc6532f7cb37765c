from challenger.helpers import leaderboard_cache
from challenger.helpers.leaderboard_cache import (
    get_cached_leaderboard,
    invalidate_leaderboard_cache,
    set_cached_leaderboard,
)


def test_entries_are_per_event():
    set_cached_leaderboard(1, {'event_id': 1})
    set_cached_leaderboard(2, {'event_id': 2})
    assert get_cached_leaderboard(1) == {'event_id': 1}
    assert get_cached_leaderboard(2) == {'event_id': 2}
    assert get_cached_leaderboard(3) is None


def test_expired_entry_is_dropped(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(leaderboard_cache.time, 'time', lambda: now[0])

    set_cached_leaderboard(1, {'event_id': 1})
    now[0] += leaderboard_cache.LEADERBOARD_CACHE_TTL + 1

    assert get_cached_leaderboard(1) is None
    assert 1 not in leaderboard_cache.LEADERBOARD_CACHE


def test_invalidate_clears_every_event():
    set_cached_leaderboard(1, {'event_id': 1})
    set_cached_leaderboard(2, {'event_id': 2})
    invalidate_leaderboard_cache()
    assert get_cached_leaderboard(1) is None
    assert get_cached_leaderboard(2) is None
