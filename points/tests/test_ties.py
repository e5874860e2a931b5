from decimal import Decimal

from django.test import SimpleTestCase

from points.defaults import default_points_config
from points.exceptions import ConfigurationError
from points.results import RawPlayerResult, format_position
from points.tables import PointsTable
from points.ties import TieHandler


def raw(player_id, net=None, gross=None):
    return RawPlayerResult(player_id=player_id, player_name=f"Player {player_id}", net_score=net, gross_score=gross)


class TieHandlerTests(SimpleTestCase):

    def setUp(self):
        self.table = PointsTable(default_points_config())
        self.handler = TieHandler(self.table)

    def test_two_players_tied_for_first(self):
        results = [raw(1, 70), raw(2, 68), raw(3, 68)]

        processed = self.handler.process_results_with_ties(results, "tour")

        self.assertEqual([r.player_id for r in processed], [2, 3, 1])
        self.assertEqual([r.position for r in processed], [1, 1, 3])
        expected = (self.table.lookup("tour", 1) + self.table.lookup("tour", 2)) / 2
        self.assertEqual(processed[0].points, expected)
        self.assertEqual(processed[1].points, expected)
        self.assertEqual(processed[2].points, self.table.lookup("tour", 3))
        self.assertTrue(processed[0].tied)
        self.assertFalse(processed[2].tied)
        self.assertEqual(processed[0].display_position, "T1")

    def test_gross_always_uses_tour_table(self):
        results = [raw(1, gross=80), raw(2, gross=78), raw(3, gross=78)]

        processed = self.handler.process_results_with_ties(results, "league", axis="gross")

        expected = (self.table.lookup("tour", 1) + self.table.lookup("tour", 2)) / 2
        self.assertEqual(processed[0].points, expected)
        self.assertEqual(processed[2].points, self.table.lookup("tour", 3))
        self.assertNotEqual(processed[2].points, self.table.lookup("league", 3))

    def test_empty_results(self):
        self.assertEqual(self.handler.process_results_with_ties([], "tour"), [])

    def test_empty_results_unknown_category_still_raises(self):
        with self.assertRaises(ConfigurationError):
            self.handler.process_results_with_ties([], "unknown")

    def test_missing_score_sorts_last(self):
        results = [raw(1, None), raw(2, 71), raw(3, 69)]

        processed = self.handler.process_results_with_ties(results, "tour")

        self.assertEqual([r.player_id for r in processed], [3, 2, 1])
        self.assertEqual(processed[2].position, 3)
        self.assertEqual(processed[2].points, self.table.lookup("tour", 3))

    def test_missing_scores_tie_together(self):
        results = [raw(1, None), raw(2, 71), raw(3, None)]

        processed = self.handler.process_results_with_ties(results, "league")

        self.assertEqual([r.position for r in processed], [1, 2, 2])
        expected = (self.table.lookup("league", 2) + self.table.lookup("league", 3)) / 2
        self.assertEqual(processed[1].points, expected)

    def test_single_missing_score_gets_first_place(self):
        processed = self.handler.process_results_with_ties([raw(1, None)], "tour")
        self.assertEqual(processed[0].position, 1)
        self.assertEqual(processed[0].points, self.table.lookup("tour", 1))

    def test_beyond_table_uses_fallback(self):
        results = [raw(i, 60 + i) for i in range(1, 71)]

        processed = self.handler.process_results_with_ties(results, "major")

        self.assertEqual(processed[-1].position, 70)
        self.assertEqual(processed[-1].points, self.table.fallback_for("major"))

    def test_unknown_category(self):
        with self.assertRaises(ConfigurationError):
            self.handler.process_results_with_ties([raw(1, 70)], "unknown")

    def test_unknown_axis(self):
        with self.assertRaises(ValueError):
            self.handler.process_results_with_ties([raw(1, 70)], "tour", axis="stableford")

    def test_skip_ranking(self):
        results = [raw(1, 70), raw(2, 71), raw(3, 71), raw(4, 72), raw(5, 73), raw(6, 73), raw(7, 73)]

        processed = self.handler.process_results_with_ties(results, "major")

        self.assertEqual([r.position for r in processed], [1, 2, 2, 4, 5, 5, 5])

    def test_points_sum_is_preserved(self):
        results = [raw(1, 70), raw(2, 71), raw(3, 71), raw(4, 72), raw(5, 73), raw(6, 73), raw(7, 73)]

        processed = self.handler.process_results_with_ties(results, "major")

        expected = sum((self.table.lookup("major", p) for p in range(1, 8)), Decimal(0))
        self.assertEqual(sum((r.points for r in processed), Decimal(0)), expected)

    def test_points_never_increase_down_the_field(self):
        results = [raw(i, score) for i, score in enumerate([72, 70, 70, 75, 68, 75, 75, 80, 69], start=1)]

        processed = self.handler.process_results_with_ties(results, "tour")

        for better, worse in zip(processed, processed[1:]):
            self.assertGreaterEqual(better.points, worse.points)
            self.assertLessEqual(better.position, worse.position)

    def test_processing_is_repeatable(self):
        results = [raw(1, 70), raw(2, 68), raw(3, 68), raw(4, None)]

        first = self.handler.process_results_with_ties(results, "supr")
        second = self.handler.process_results_with_ties(results, "supr")

        self.assertEqual(first, second)

    def test_input_order_kept_within_tie(self):
        results = [raw(5, 68), raw(2, 68), raw(9, 68)]

        processed = self.handler.process_results_with_ties(results, "tour")

        self.assertEqual([r.player_id for r in processed], [5, 2, 9])

    def test_decimal_scores(self):
        results = [raw(1, Decimal("70.5")), raw(2, Decimal("70.5")), raw(3, Decimal("70.4"))]

        processed = self.handler.process_results_with_ties(results, "tour")

        self.assertEqual([r.player_id for r in processed], [3, 1, 2])
        self.assertEqual([r.position for r in processed], [1, 2, 2])

    def test_fixed_fallback(self):
        handler = TieHandler(PointsTable(default_points_config(), fallback="0.5"))

        self.assertEqual(handler.points_for_position(64, "major"), Decimal("0.5"))
        self.assertEqual(handler.tie_points(63, 2, "major"), (Decimal(7) + Decimal("0.5")) / 2)


class PositionHelperTests(SimpleTestCase):

    def test_detect_existing_ties(self):
        self.assertTrue(TieHandler.detect_existing_ties([1, 2, 2, 4]))
        self.assertFalse(TieHandler.detect_existing_ties([1, 2, 3]))
        self.assertFalse(TieHandler.detect_existing_ties([]))

    def test_valid_positions(self):
        valid, issues = TieHandler.validate_positions([(1, 68), (2, 70), (2, 70), (4, 71)])
        self.assertTrue(valid)
        self.assertEqual(issues, [])

    def test_position_after_tie_must_skip(self):
        valid, issues = TieHandler.validate_positions([(1, 68), (1, 68), (2, 70)])
        self.assertFalse(valid)
        self.assertIn("Position 2 appears after position 1, expected 3", issues)

    def test_first_position_must_be_one(self):
        valid, issues = TieHandler.validate_positions([(2, 68), (3, 70)])
        self.assertFalse(valid)
        self.assertIn("Position 2 appears first, expected 1", issues)

    def test_same_score_different_position(self):
        valid, issues = TieHandler.validate_positions([(1, 68), (2, 68)])
        self.assertFalse(valid)
        self.assertIn("Players with same score (68) should have same position", issues)

    def test_different_score_same_position(self):
        valid, issues = TieHandler.validate_positions([(1, 68), (1, 69)])
        self.assertFalse(valid)
        self.assertIn("Players with different scores should not have same position", issues)

    def test_format_position(self):
        self.assertEqual(format_position(2, True), "T2")
        self.assertEqual(format_position(2, False), "2")
