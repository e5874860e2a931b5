import json
import structlog

from typing import Dict, Optional

from django.db import transaction

from leaderboards.cache import clear_leaderboards
from points.tables import PointsTable
from .models import Tournament, RecalculationLog, BOTH, RECALCULATION_MODES
from .services import TournamentProcessingService

logger = structlog.get_logger(__name__)


class RecalculationResult:
    """Container for the outcome of one recalculation action"""

    def __init__(self, action: str, mode: str):
        self.action = action
        self.mode = mode
        self.tournaments_updated = []
        self.tournaments_skipped = []
        self.results_updated = 0

    def add_tournament(self, tournament: Tournament, count: int):
        self.tournaments_updated.append(tournament.name)
        self.results_updated += count

    def skip_tournament(self, tournament: Tournament):
        self.tournaments_skipped.append(tournament.name)
        logger.info("Manual tournament skipped", tournament=tournament.name, action=self.action)

    def to_dict(self) -> Dict:
        return {
            "action": self.action,
            "mode": self.mode,
            "tournaments_updated": len(self.tournaments_updated),
            "tournaments_skipped": len(self.tournaments_skipped),
            "results_updated": self.results_updated,
            "updated": self.tournaments_updated,
            "skipped": self.tournaments_skipped,
        }


class RecalculationService:
    """
    Rescores stored tournaments against the current points configuration.

    Tournaments with manually assigned points keep their values. Every action
    is recorded in a RecalculationLog row.
    """

    def __init__(self, points_table: Optional[PointsTable] = None):
        self.processing = TournamentProcessingService(points_table)

    def recalculate_tournament(self, tournament_id, mode=BOTH) -> RecalculationResult:
        tournament = Tournament.objects.get(pk=tournament_id)
        return self._run("tournament", mode, [tournament], tournament=tournament)

    def recalculate_all(self, mode=BOTH, category=None) -> RecalculationResult:
        queryset = Tournament.objects.all()
        if category is not None:
            self.processing.points_table.ensure_category(category)
            queryset = queryset.filter(category=category)
        return self._run("all" if category is None else f"category:{category}", mode,
                         list(queryset.order_by("date", "id")))

    def recalculate_player(self, player_id, mode=BOTH) -> RecalculationResult:
        """
        Rescore every tournament the player appears in. The whole field is
        rescored, since one player's position depends on everyone else's.
        """
        tournaments = Tournament.objects.filter(results__player_id=player_id).distinct().order_by("date", "id")
        return self._run("player", mode, list(tournaments), player_id=player_id)

    def _run(self, action, mode, tournaments, tournament=None, player_id=None) -> RecalculationResult:
        if mode not in RECALCULATION_MODES:
            raise ValueError(f"mode must be one of {', '.join(RECALCULATION_MODES)}, got {mode!r}")

        result = RecalculationResult(action, mode)
        with transaction.atomic():
            for item in tournaments:
                if item.is_manual:
                    result.skip_tournament(item)
                    continue
                result.add_tournament(item, self.processing.rescore(item, mode))

            RecalculationLog.objects.create(
                action=action,
                mode=mode,
                tournament=tournament,
                player_id=player_id,
                details=json.dumps(result.to_dict()),
            )

        clear_leaderboards()
        logger.info("Recalculation complete", action=action, mode=mode,
                    tournaments=len(result.tournaments_updated), results=result.results_updated)
        return result
