import structlog

from django.conf import settings
from django.core.cache import cache

from points.results import AXES, NET, GROSS
from .calculator import LeaderboardCalculator

logger = structlog.get_logger(__name__)

LEADERBOARD_CACHE_KEYS = {
    NET: "leaderboard:net",
    GROSS: "leaderboard:gross",
}


def get_leaderboard(axis=NET):
    if axis not in AXES:
        raise ValueError(f"axis must be one of {', '.join(AXES)}, got {axis!r}")

    key = LEADERBOARD_CACHE_KEYS[axis]
    leaderboard = cache.get(key)
    if leaderboard is None:
        leaderboard = LeaderboardCalculator(axis).calculate()
        cache.set(key, leaderboard, settings.LEAGUE_LEADERBOARD_CACHE_SECONDS)
        logger.info("Leaderboard calculated", axis=axis, players=len(leaderboard))

    return leaderboard


def clear_leaderboards():
    cache.delete_many(list(LEADERBOARD_CACHE_KEYS.values()))
