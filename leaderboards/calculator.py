from collections import OrderedDict
from decimal import Decimal
from typing import Any, Dict, List

from django.conf import settings

from core.util import round_half_up
from points.results import AXES, GROSS, NET
from points.tables import CATEGORIES, MAJOR, TOUR
from tournaments.models import PlayerResult

# players without a default handicap are ranked after everyone with one
MISSING_HANDICAP = Decimal(999)


class LeaderboardCalculator:
    """
    Season standings on one axis, built from stored PlayerResult rows.

    Each player is ranked by the total of their best N events (N is
    LEAGUE_LEADERBOARD_EVENT_COUNT), then by default handicap. Players
    without best-N points are left off the board.
    """

    def __init__(self, axis=NET, event_count=None):
        if axis not in AXES:
            raise ValueError(f"axis must be one of {', '.join(AXES)}, got {axis!r}")
        self.axis = axis
        self.event_count = event_count or settings.LEAGUE_LEADERBOARD_EVENT_COUNT

    def points_of(self, result: PlayerResult) -> Decimal:
        value = result.gross_points if self.axis == GROSS else result.points
        return value if value is not None else Decimal(0)

    def calculate(self) -> List[Dict[str, Any]]:
        results = PlayerResult.objects \
            .select_related("tournament", "player") \
            .order_by("player_id", "-tournament__date", "tournament_id")

        by_player = OrderedDict()
        for result in results:
            by_player.setdefault(result.player_id, []).append(result)

        entries = [self.player_entry(player_results) for player_results in by_player.values()]
        entries = [entry for entry in entries if entry["top_total_points"] > 0]
        entries.sort(key=self.ranking_key)

        for rank, entry in enumerate(entries, start=1):
            entry["rank"] = rank
        return entries

    @staticmethod
    def ranking_key(entry):
        handicap = entry["player"]["default_handicap"]
        return (
            -entry["top_total_points"],
            handicap if handicap is not None else MISSING_HANDICAP,
            entry["player"]["name"].lower(),
        )

    def player_entry(self, results: List[PlayerResult]) -> Dict[str, Any]:
        player = results[0].player

        category_points = {category: Decimal(0) for category in CATEGORIES}
        net_scores = []
        gross_scores = []
        for result in results:
            category_points[result.tournament.category] += self.points_of(result)
            if result.net_score is not None:
                net_scores.append(result.net_score)
            if result.gross_score is not None:
                gross_scores.append(result.gross_score)

        # sorted is stable, so equal points keep the most recent event first
        best = sorted(results, key=self.points_of, reverse=True)[:self.event_count]
        top_points = {MAJOR: Decimal(0), TOUR: Decimal(0)}
        for result in best:
            if result.tournament.category in top_points:
                top_points[result.tournament.category] += self.points_of(result)

        average_net = _average(net_scores)
        average_gross = _average(gross_scores)

        return {
            "player": {
                "id": player.id,
                "name": player.name,
                "default_handicap": player.default_handicap,
            },
            "total_points": sum(category_points.values(), Decimal(0)),
            "category_points": category_points,
            "major_points": category_points[MAJOR],
            "tour_points": category_points[TOUR],
            "total_events": len(results),
            "average_net_score": average_net,
            "average_gross_score": average_gross,
            "average_score": average_gross if self.axis == GROSS else average_net,
            "top_total_points": sum((self.points_of(result) for result in best), Decimal(0)),
            "top_major_points": top_points[MAJOR],
            "top_tour_points": top_points[TOUR],
        }


def _average(values):
    if not values:
        return None
    return round_half_up(sum(values, Decimal(0)) / len(values))
