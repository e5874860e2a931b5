import structlog

from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from django.db import transaction

from core.util import round_half_up
from leaderboards.cache import clear_leaderboards
from players.models import Player
from points.results import GROSS, NET, ProcessedResult, RawPlayerResult
from points.tables import PointsTable
from points.ties import TieHandler
from points.utils import load_points_table
from .exceptions import InvalidUploadError, ManualPointsError
from .models import Tournament, PlayerResult, CALCULATED, MANUAL, BOTH
from .normalization import ResultRow

logger = structlog.get_logger(__name__)

TOURNAMENT_FIELDS = ("name", "date", "category", "status")


def points_mode_for(rows: Sequence[ResultRow]) -> str:
    """
    Manual when every row carries a position and points, calculated when no
    row carries points. Anything in between is rejected.
    """
    if rows and all(row.has_manual_points for row in rows):
        return MANUAL
    if any(row.points is not None for row in rows):
        raise ManualPointsError()
    return CALCULATED


class TournamentProcessingService:
    """
    Turns normalized result rows into ranked, scored PlayerResult rows.

    Every write happens inside one transaction: a configuration error or a
    bad row leaves the database as it was.
    """

    def __init__(self, points_table: Optional[PointsTable] = None):
        self.points_table = points_table if points_table is not None else load_points_table()
        self.tie_handler = TieHandler(self.points_table)

    def score(self, raw_results: List[RawPlayerResult], category: str) \
            -> Tuple[List[ProcessedResult], Dict[int, ProcessedResult]]:
        """Run the net and gross passes; gross results are keyed by player id."""
        net = self.tie_handler.process_results_with_ties(raw_results, category, NET)
        gross = self.tie_handler.process_results_with_ties(raw_results, category, GROSS)
        return net, {result.player_id: result for result in gross}

    def preview(self, category: str, rows: List[ResultRow]) -> Dict:
        """
        Score the rows without touching the database. Players that do not
        exist yet get negative temporary ids.
        """
        self.points_table.ensure_category(category)

        raw_results = []
        new_player_ids = set()
        rows_by_id = {}
        next_temp_id = -1
        for row in rows:
            player = self._find_player(row)
            if player is None:
                player_id = next_temp_id
                next_temp_id -= 1
                new_player_ids.add(player_id)
            else:
                player_id = player.id
            if player_id in rows_by_id:
                raise InvalidUploadError(f"{row.player_name} appears more than once")
            rows_by_id[player_id] = row
            raw_results.append(row.to_raw(player_id))

        net, gross_by_player = self.score(raw_results, category)

        preview_rows = []
        for result in net:
            gross = gross_by_player[result.player_id]
            preview_rows.append({
                "player_id": result.player_id,
                "player_name": result.player_name,
                "email": rows_by_id[result.player_id].email,
                "is_new": result.player_id in new_player_ids,
                "net_score": result.net_score,
                "gross_score": result.gross_score,
                "handicap": result.handicap,
                "position": result.position,
                "display_position": result.display_position,
                "points": round_half_up(result.points),
                "gross_position": gross.position,
                "gross_display_position": gross.display_position,
                "gross_points": round_half_up(gross.points),
            })

        summary = {
            "players": len(preview_rows),
            "new_players": len(new_player_ids),
            "total_points": sum((row["points"] for row in preview_rows), Decimal(0)),
            "total_gross_points": sum((row["gross_points"] for row in preview_rows), Decimal(0)),
            "has_ties": any(result.tied for result in net),
        }
        return {"category": category, "results": preview_rows, "summary": summary}

    def process(self, name, date, category, rows: List[ResultRow], status="completed") -> Tournament:
        """Create a calculated tournament with all of its results."""
        with transaction.atomic():
            tournament = Tournament.objects.create(
                name=name, date=date, category=category, status=status, points_mode=CALCULATED
            )
            count = self._write_results(tournament, rows)

        clear_leaderboards()
        logger.info("Tournament processed", tournament=tournament.name, category=category, results=count)
        return tournament

    def manual_entry(self, name, date, category, rows: List[ResultRow], status="completed") -> Tournament:
        """
        Create a tournament from manually entered rows. When every row carries
        a position and points the values are stored as given; otherwise the
        rows are scored like an upload.
        """
        mode = points_mode_for(rows)
        if mode == CALCULATED:
            return self.process(name, date, category, rows, status)

        with transaction.atomic():
            tournament = Tournament.objects.create(
                name=name, date=date, category=category, status=status, points_mode=MANUAL
            )
            count = self._write_results(tournament, rows)

        clear_leaderboards()
        logger.info("Manual tournament entered", tournament=tournament.name, category=category, results=count)
        return tournament

    def edit(self, tournament: Tournament, changes: Dict, rows: Optional[List[ResultRow]] = None) -> Tournament:
        """
        Update tournament fields. New rows replace all results; without rows
        a calculated tournament is rescored in place (its category may have
        changed).
        """
        with transaction.atomic():
            for field in TOURNAMENT_FIELDS:
                if field in changes:
                    setattr(tournament, field, changes[field])
            self.points_table.ensure_category(tournament.category)

            if rows is not None:
                tournament.points_mode = points_mode_for(rows)
                tournament.save()
                tournament.results.all().delete()
                self._write_results(tournament, rows)
            else:
                tournament.save()
                if not tournament.is_manual:
                    self.rescore(tournament)

        clear_leaderboards()
        logger.info("Tournament edited", tournament=tournament.name, replaced_results=rows is not None)
        return tournament

    def rescore(self, tournament: Tournament, mode=BOTH) -> int:
        """Recompute positions and points of stored results. Returns the number of rows."""
        results = list(tournament.results.select_related("player"))
        by_player = {result.player_id: result for result in results}
        raw_results = [
            RawPlayerResult(
                player_id=result.player_id,
                player_name=result.player.name,
                gross_score=result.gross_score,
                net_score=result.net_score,
                handicap=result.handicap,
            ) for result in results
        ]

        fields = []
        if mode in (NET, BOTH):
            for processed in self.tie_handler.process_results_with_ties(raw_results, tournament.category, NET):
                result = by_player[processed.player_id]
                result.position = processed.position
                result.points = round_half_up(processed.points)
            fields += ["position", "points"]
        if mode in (GROSS, BOTH):
            for processed in self.tie_handler.process_results_with_ties(raw_results, tournament.category, GROSS):
                result = by_player[processed.player_id]
                result.gross_position = processed.position
                result.gross_points = round_half_up(processed.points)
            fields += ["gross_position", "gross_points"]

        if results and fields:
            PlayerResult.objects.bulk_update(results, fields)
        return len(results)

    def _write_results(self, tournament: Tournament, rows: List[ResultRow]) -> int:
        self.points_table.ensure_category(tournament.category)
        players = self._resolve_players(rows)
        rows_by_player = {player.id: row for player, row in zip(players, rows)}
        raw_results = [row.to_raw(player.id) for player, row in zip(players, rows)]

        if tournament.is_manual:
            net_values = {player_id: (row.position, row.points) for player_id, row in rows_by_player.items()}
        else:
            net = self.tie_handler.process_results_with_ties(raw_results, tournament.category, NET)
            net_values = {result.player_id: (result.position, result.points) for result in net}

        if tournament.is_manual and all(row.has_manual_gross_points for row in rows):
            gross_values = {
                player_id: (row.gross_position, row.gross_points) for player_id, row in rows_by_player.items()
            }
        else:
            gross = self.tie_handler.process_results_with_ties(raw_results, tournament.category, GROSS)
            gross_values = {result.player_id: (result.position, result.points) for result in gross}

        results = []
        for player_id, row in rows_by_player.items():
            position, points = net_values[player_id]
            gross_position, gross_points = gross_values[player_id]
            results.append(PlayerResult(
                tournament=tournament,
                player_id=player_id,
                position=position,
                points=round_half_up(points),
                gross_position=gross_position,
                gross_points=round_half_up(gross_points),
                gross_score=row.gross_score,
                net_score=row.net_score,
                handicap=row.handicap,
            ))

        PlayerResult.objects.bulk_create(results)
        return len(results)

    @staticmethod
    def _find_player(row: ResultRow) -> Optional[Player]:
        if row.player_id is not None:
            player = Player.objects.filter(pk=row.player_id).first()
            if player is None:
                raise InvalidUploadError(f"Player {row.player_id} does not exist")
            return player
        return Player.objects.find_by_email(row.email) or Player.objects.find_by_name(row.player_name)

    def _resolve_players(self, rows: List[ResultRow]) -> List[Player]:
        players = []
        seen = set()
        for row in rows:
            player = self._find_player(row)
            if player is None:
                player, _ = Player.objects.find_or_create(row.player_name, row.email, row.handicap)
                logger.info("Player created", player=player.name)
            if player.id in seen:
                raise InvalidUploadError(f"{row.player_name} appears more than once")
            seen.add(player.id)
            players.append(player)
        return players
