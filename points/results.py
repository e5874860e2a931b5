from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union

NET = "net"
GROSS = "gross"
AXES = (NET, GROSS)
AXIS_CHOICES = (
    (NET, "Net"),
    (GROSS, "Gross"),
)

Score = Union[int, Decimal]


def format_position(position: int, tied: bool) -> str:
    return f"T{position}" if tied else str(position)


@dataclass(frozen=True)
class RawPlayerResult:
    """One player's performance in one tournament, before ranking."""

    player_id: Any
    player_name: str
    gross_score: Optional[Score] = None
    net_score: Optional[Score] = None
    handicap: Optional[Decimal] = None

    def score_for(self, axis: str) -> Optional[Score]:
        if axis == NET:
            return self.net_score
        if axis == GROSS:
            return self.gross_score
        raise ValueError(f"axis must be one of {', '.join(AXES)}, got {axis!r}")


@dataclass(frozen=True)
class ProcessedResult:
    """A RawPlayerResult after ranking on one axis."""

    player_id: Any
    player_name: str
    gross_score: Optional[Score]
    net_score: Optional[Score]
    handicap: Optional[Decimal]
    position: int
    points: Decimal
    tied: bool = False

    @classmethod
    def from_raw(cls, raw: RawPlayerResult, position: int, points: Decimal, tied: bool) -> "ProcessedResult":
        return cls(
            player_id=raw.player_id,
            player_name=raw.player_name,
            gross_score=raw.gross_score,
            net_score=raw.net_score,
            handicap=raw.handicap,
            position=position,
            points=points,
            tied=tied,
        )

    @property
    def display_position(self) -> str:
        return format_position(self.position, self.tied)
