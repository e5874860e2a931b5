from datetime import date
from decimal import Decimal

from django.test import TestCase

from players.models import Player
from players.tests.factories import PlayerFactory
from points.defaults import default_points_config
from points.exceptions import ConfigurationError
from points.models import PointsTableEntry
from points.tables import PointsTable
from tournaments.exceptions import InvalidUploadError, ManualPointsError
from tournaments.models import Tournament, PlayerResult
from tournaments.normalization import normalize_rows
from tournaments.services import TournamentProcessingService, points_mode_for
from tournaments.tests.factories import TournamentFactory, PlayerResultFactory

TABLE = PointsTable(default_points_config())


def upload_rows():
    return normalize_rows([
        {"Player": "Kari Nordmann", "Total": 70, "Course Handicap": 10},
        {"Player": "Ola Nordmann", "Total": 68, "Course Handicap": 14},
        {"Player": "Per Hansen", "Total": 68, "Course Handicap": 2},
    ])


class TournamentProcessingTests(TestCase):

    def setUp(self):
        PointsTableEntry.objects.replace_all(default_points_config())
        self.service = TournamentProcessingService()

    def test_process_creates_tournament_players_and_results(self):
        tournament = self.service.process("Spring Open", date(2025, 5, 1), "tour", upload_rows())

        self.assertEqual(tournament.points_mode, "calculated")
        self.assertEqual(Player.objects.count(), 3)
        results = {r.player.name: r for r in PlayerResult.objects.filter(tournament=tournament)}

        tied_points = (TABLE.lookup("tour", 1) + TABLE.lookup("tour", 2)) / 2
        self.assertEqual(results["Ola Nordmann"].position, 1)
        self.assertEqual(results["Per Hansen"].position, 1)
        self.assertEqual(results["Ola Nordmann"].points, tied_points)
        self.assertEqual(results["Kari Nordmann"].position, 3)
        self.assertEqual(results["Kari Nordmann"].points, TABLE.lookup("tour", 3))

    def test_process_scores_gross_from_tour_table(self):
        tournament = self.service.process("League Night", date(2025, 5, 8), "league", upload_rows())

        results = {r.player.name: r for r in PlayerResult.objects.filter(tournament=tournament)}
        # gross: Per 70, Kari 80, Ola 82
        self.assertEqual(results["Per Hansen"].gross_position, 1)
        self.assertEqual(results["Per Hansen"].gross_points, TABLE.lookup("tour", 1))
        self.assertEqual(results["Ola Nordmann"].gross_position, 3)
        self.assertEqual(results["Ola Nordmann"].gross_points, TABLE.lookup("tour", 3))
        self.assertEqual(results["Ola Nordmann"].gross_score, Decimal(82))

    def test_process_rounds_points_to_two_places(self):
        rows = normalize_rows([
            {"Player": "A", "Total": 70},
            {"Player": "B", "Total": 70},
            {"Player": "C", "Total": 70},
        ])

        tournament = self.service.process("Three Way", date(2025, 5, 1), "league", rows)

        expected = sum((TABLE.lookup("league", p) for p in (1, 2, 3)), Decimal(0)) / 3
        for result in PlayerResult.objects.filter(tournament=tournament):
            self.assertEqual(result.points, expected.quantize(Decimal("0.01")))

    def test_process_matches_existing_players(self):
        existing = PlayerFactory(name="Kari Nordmann")

        tournament = self.service.process("Spring Open", date(2025, 5, 1), "tour", upload_rows())

        self.assertEqual(Player.objects.count(), 3)
        self.assertTrue(PlayerResult.objects.filter(tournament=tournament, player=existing).exists())

    def test_unknown_category_writes_nothing(self):
        with self.assertRaises(ConfigurationError):
            self.service.process("Bad", date(2025, 5, 1), "pairs", upload_rows())

        self.assertEqual(Tournament.objects.count(), 0)
        self.assertEqual(Player.objects.count(), 0)

    def test_duplicate_player_is_rejected(self):
        rows = normalize_rows([{"Player": "Kari", "Total": 70}, {"Player": "kari", "Total": 72}])

        with self.assertRaises(InvalidUploadError):
            self.service.process("Twice", date(2025, 5, 1), "tour", rows)

        self.assertEqual(Tournament.objects.count(), 0)

    def test_preview_does_not_write(self):
        PlayerFactory(name="Per Hansen")

        preview = self.service.preview("tour", upload_rows())

        self.assertEqual(Tournament.objects.count(), 0)
        self.assertEqual(Player.objects.count(), 1)
        self.assertEqual(preview["summary"]["players"], 3)
        self.assertEqual(preview["summary"]["new_players"], 2)
        self.assertTrue(preview["summary"]["has_ties"])
        self.assertEqual(preview["results"][0]["display_position"], "T1")
        new_ids = [row["player_id"] for row in preview["results"] if row["is_new"]]
        self.assertTrue(all(player_id < 0 for player_id in new_ids))

    def test_preview_unknown_category(self):
        with self.assertRaises(ConfigurationError):
            self.service.preview("pairs", upload_rows())

    def test_manual_entry_keeps_given_points(self):
        rows = normalize_rows([
            {"player_name": "Kari", "position": 1, "points": 120},
            {"player_name": "Ola", "position": 2, "points": 80},
        ], skip_unscored=False)

        tournament = self.service.manual_entry("Team Event", date(2025, 7, 1), "major", rows)

        self.assertEqual(tournament.points_mode, "manual")
        kari = PlayerResult.objects.get(tournament=tournament, player__name="Kari")
        self.assertEqual(kari.points, Decimal(120))
        self.assertEqual(kari.position, 1)
        # no scores, so the calculated gross pass puts both on the same line
        self.assertEqual(kari.gross_position, 1)

    def test_manual_entry_with_gross_values(self):
        rows = normalize_rows([
            {"player_name": "Kari", "position": 1, "points": 120, "gross_position": 2, "gross_points": 30},
            {"player_name": "Ola", "position": 2, "points": 80, "gross_position": 1, "gross_points": 60},
        ], skip_unscored=False)

        tournament = self.service.manual_entry("Team Event", date(2025, 7, 1), "major", rows)

        ola = PlayerResult.objects.get(tournament=tournament, player__name="Ola")
        self.assertEqual(ola.gross_position, 1)
        self.assertEqual(ola.gross_points, Decimal(60))

    def test_manual_entry_without_points_is_calculated(self):
        rows = normalize_rows([{"player_name": "Kari", "net_score": 70}], skip_unscored=False)

        tournament = self.service.manual_entry("Calculated", date(2025, 7, 1), "tour", rows)

        self.assertEqual(tournament.points_mode, "calculated")
        self.assertEqual(tournament.results.get().points, TABLE.lookup("tour", 1))

    def test_partial_manual_points_are_rejected(self):
        rows = normalize_rows([
            {"player_name": "Kari", "position": 1, "points": 120},
            {"player_name": "Ola", "net_score": 70},
        ], skip_unscored=False)

        with self.assertRaises(ManualPointsError):
            self.service.manual_entry("Mixed", date(2025, 7, 1), "major", rows)

    def test_points_mode_for_empty_rows(self):
        self.assertEqual(points_mode_for([]), "calculated")

    def test_edit_category_rescored(self):
        tournament = self.service.process("Spring Open", date(2025, 5, 1), "tour", upload_rows())

        self.service.edit(tournament, {"category": "major"})

        kari = PlayerResult.objects.get(tournament=tournament, player__name="Kari Nordmann")
        self.assertEqual(kari.points, TABLE.lookup("major", 3))
        self.assertEqual(kari.gross_points, TABLE.lookup("tour", 2))

    def test_edit_replaces_results(self):
        tournament = self.service.process("Spring Open", date(2025, 5, 1), "tour", upload_rows())
        rows = normalize_rows([{"Player": "Kari Nordmann", "Total": 65}])

        self.service.edit(tournament, {"name": "Spring Open (corrected)"}, rows)

        tournament.refresh_from_db()
        self.assertEqual(tournament.name, "Spring Open (corrected)")
        self.assertEqual(tournament.results.count(), 1)
        self.assertEqual(tournament.results.get().position, 1)

    def test_edit_manual_tournament_keeps_points(self):
        tournament = TournamentFactory(category="major", points_mode="manual")
        PlayerResultFactory(tournament=tournament, position=1, points=Decimal("99.00"), net_score=80)

        self.service.edit(tournament, {"category": "tour"})

        self.assertEqual(tournament.results.get().points, Decimal("99.00"))

    def test_rescore_single_axis(self):
        tournament = TournamentFactory(category="tour")
        first = PlayerResultFactory(tournament=tournament, net_score=68, gross_score=80, position=5,
                                    gross_position=5)
        PlayerResultFactory(tournament=tournament, net_score=70, gross_score=75, position=5, gross_position=5)

        count = self.service.rescore(tournament, "net")

        first.refresh_from_db()
        self.assertEqual(count, 2)
        self.assertEqual(first.position, 1)
        self.assertEqual(first.points, TABLE.lookup("tour", 1))
        self.assertEqual(first.gross_position, 5)
