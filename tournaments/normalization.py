import re
import structlog

from dataclasses import dataclass, asdict
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional

from points.results import RawPlayerResult
from .exceptions import UploadError

logger = structlog.get_logger(__name__)

SKIP_MARKERS = ("", "-", "n/a", "na", "dnf", "dns", "dq", "wd")

# Every header variant we accept, after normalize_header, mapped to a field name
HEADER_ALIASES = {
    "player": "player_name",
    "name": "player_name",
    "display name": "player_name",
    "player name": "player_name",
    "email": "email",
    "e-mail": "email",
    "player id": "player_id",
    "total": "net_score",
    "net": "net_score",
    "net score": "net_score",
    "net total": "net_score",
    "gross": "gross_score",
    "gross score": "gross_score",
    "gross total": "gross_score",
    "course handicap": "handicap",
    "playing handicap": "handicap",
    "handicap": "handicap",
    "hcp": "handicap",
    "pos": "position",
    "position": "position",
    "net position": "position",
    "points": "points",
    "net points": "points",
    "gross position": "gross_position",
    "gross pos": "gross_position",
    "gross points": "gross_points",
}


def normalize_header(header: Any) -> str:
    if header is None:
        return ""
    return re.sub(r"[\s_]+", " ", str(header)).strip().lower()


def is_skip_marker(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip().lower() in SKIP_MARKERS


def parse_decimal(value: Any, label: str) -> Optional[Decimal]:
    """
    Parse a spreadsheet or JSON cell into a Decimal. Skip markers become None.
    A decimal comma is accepted ("71,5").
    """
    if is_skip_marker(value):
        return None
    if isinstance(value, bool):
        raise UploadError(f"Invalid {label}: {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, int):
        return Decimal(value)

    text = str(value).strip().replace(",", ".")
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise UploadError(f"Invalid {label}: {value!r}")
    if not number.is_finite():
        raise UploadError(f"Invalid {label}: {value!r}")
    return number


def parse_position(value: Any, label: str = "position") -> Optional[int]:
    """Positions may arrive as 3, 3.0, "3" or "T3"."""
    if is_skip_marker(value):
        return None
    if isinstance(value, str):
        value = value.strip().upper().lstrip("T")
    number = parse_decimal(value, label)
    if number is None or number != number.to_integral_value() or number < 1:
        raise UploadError(f"Invalid {label}: {value!r}")
    return int(number)


@dataclass
class ResultRow:
    """One player's row from an upload or a manual entry, with typed values."""

    player_name: str
    email: Optional[str] = None
    player_id: Optional[int] = None
    net_score: Optional[Decimal] = None
    gross_score: Optional[Decimal] = None
    handicap: Optional[Decimal] = None
    position: Optional[int] = None
    points: Optional[Decimal] = None
    gross_position: Optional[int] = None
    gross_points: Optional[Decimal] = None

    def to_raw(self, player_id=None) -> RawPlayerResult:
        return RawPlayerResult(
            player_id=player_id if player_id is not None else self.player_id,
            player_name=self.player_name,
            gross_score=self.gross_score,
            net_score=self.net_score,
            handicap=self.handicap,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def has_manual_points(self) -> bool:
        return self.position is not None and self.points is not None

    @property
    def has_manual_gross_points(self) -> bool:
        return self.gross_position is not None and self.gross_points is not None


def canonical_fields(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename recognised headers to field names; unknown columns are dropped."""
    fields = {}
    for header, value in row.items():
        field = HEADER_ALIASES.get(normalize_header(header))
        if field is not None and field not in fields:
            fields[field] = value
    return fields


def normalize_row(row: Mapping[str, Any], skip_unscored: bool = True) -> Optional[ResultRow]:
    """
    Convert one loosely typed row into a ResultRow.

    Returns None for rows that should be ignored: no player name, or (when
    ``skip_unscored``) no net total, such as DNF or N/A. An unreadable total
    raises UploadError; an unreadable handicap counts as 0.
    """
    fields = canonical_fields(row)

    name = fields.get("player_name")
    name = str(name).strip() if name is not None else ""
    if not name:
        return None

    net_score = parse_decimal(fields.get("net_score"), f"total for {name}")
    if net_score is None and skip_unscored:
        return None

    try:
        handicap = parse_decimal(fields.get("handicap"), f"handicap for {name}")
    except UploadError:
        logger.warning("Invalid handicap, using 0", player=name, handicap=fields.get("handicap"))
        handicap = Decimal(0)

    gross_score = parse_decimal(fields.get("gross_score"), f"gross score for {name}")
    if gross_score is None and net_score is not None:
        gross_score = net_score + (handicap if handicap is not None else Decimal(0))

    email = fields.get("email")
    email = str(email).strip() if email is not None and str(email).strip() else None

    player_id = fields.get("player_id")
    if is_skip_marker(player_id):
        player_id = None
    else:
        try:
            player_id = int(player_id)
        except (TypeError, ValueError):
            raise UploadError(f"Invalid player id for {name}: {player_id!r}")
        # previews hand out negative ids for players that do not exist yet
        if player_id < 1:
            player_id = None

    return ResultRow(
        player_name=name,
        email=email,
        player_id=player_id,
        net_score=net_score,
        gross_score=gross_score,
        handicap=handicap,
        position=parse_position(fields.get("position")),
        points=parse_decimal(fields.get("points"), f"points for {name}"),
        gross_position=parse_position(fields.get("gross_position"), "gross position"),
        gross_points=parse_decimal(fields.get("gross_points"), f"gross points for {name}"),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]], skip_unscored: bool = True) -> List[ResultRow]:
    """
    Normalize every row, raising UploadError with the row number on the
    first unreadable one. Spreadsheet rows are numbered from 2 (header is 1).
    """
    normalized = []
    for index, row in enumerate(rows, start=2):
        if not isinstance(row, Mapping):
            raise UploadError(f"Row {index}: expected a mapping of column names to values")
        try:
            result = normalize_row(row, skip_unscored=skip_unscored)
        except UploadError as ex:
            raise UploadError(f"Row {index}: {ex}")
        if result is not None:
            normalized.append(result)
    return normalized
