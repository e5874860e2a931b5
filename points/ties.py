from decimal import Decimal
from itertools import groupby
from typing import Iterable, List, Sequence, Tuple

from .results import AXES, GROSS, NET, ProcessedResult, RawPlayerResult
from .tables import GROSS_CATEGORY, PointsTable


class TieHandler:
    """
    Ranks raw results on one scoring axis and awards points.

    Lower scores finish higher. Players sharing a score share a position and
    split the points of the positions they occupy, and the next player skips
    past them (1, 2, 2, 4). Missing scores finish last, together.
    """

    def __init__(self, points_table: PointsTable):
        self.points_table = points_table

    def process_results_with_ties(
        self, results: Iterable[RawPlayerResult], category: str, axis: str = NET
    ) -> List[ProcessedResult]:
        """
        Args:
            results: raw results for one tournament
            category: the tournament category (major, tour, league, supr)
            axis: "net" or "gross"

        Returns:
            ProcessedResult list in finishing order
        """
        if axis not in AXES:
            raise ValueError(f"axis must be one of {', '.join(AXES)}, got {axis!r}")

        self.points_table.ensure_category(category)
        lookup_category = GROSS_CATEGORY if axis == GROSS else category

        def score_of(result):
            return result.score_for(axis)

        ordered = sorted(results, key=lambda r: _sort_key(score_of(r)))

        processed = []
        position = 1
        for _, group in groupby(ordered, key=score_of):
            block = list(group)
            points = self.tie_points(position, len(block), lookup_category)
            tied = len(block) > 1
            for result in block:
                processed.append(ProcessedResult.from_raw(result, position, points, tied))
            position += len(block)

        return processed

    def tie_points(self, position: int, size: int, category: str) -> Decimal:
        """Average of the points for positions position..position+size-1."""
        total = sum(
            (self.points_table.lookup(category, p) for p in range(position, position + size)),
            Decimal(0),
        )
        if size == 1:
            return total
        return total / size

    def points_for_position(self, position: int, category: str) -> Decimal:
        return self.points_table.lookup(category, position)

    @staticmethod
    def detect_existing_ties(positions: Iterable[int]) -> bool:
        """True when any uploaded position is shared by more than one player."""
        positions = list(positions)
        return len(positions) != len(set(positions))

    @staticmethod
    def validate_positions(rows: Sequence[Tuple[int, object]]) -> Tuple[bool, List[str]]:
        """
        Check (position, score) rows supplied with an upload.

        Equal scores must share a position, different scores must not, and a
        new position must skip past everyone tied ahead of it.
        """
        issues = []
        ordered = sorted(rows, key=lambda row: row[0])

        previous = None
        for index, (position, score) in enumerate(ordered, start=1):
            if previous is None and position != index:
                issues.append(f"Position {position} appears first, expected {index}")
            elif previous is not None and position != previous[0] and position != index:
                issues.append(f"Position {position} appears after position {previous[0]}, expected {index}")

            if previous is not None:
                previous_position, previous_score = previous
                if score == previous_score and position != previous_position:
                    issues.append(f"Players with same score ({score}) should have same position")
                if score != previous_score and position == previous_position:
                    issues.append("Players with different scores should not have same position")

            previous = (position, score)

        return len(issues) == 0, issues


def _sort_key(score):
    if score is None:
        return 1, 0
    return 0, score
