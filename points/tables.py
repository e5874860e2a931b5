from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import ConfigurationError

MAJOR = "major"
TOUR = "tour"
LEAGUE = "league"
SUPR = "supr"

CATEGORY_CHOICES = (
    (MAJOR, "Major"),
    (TOUR, "Tour"),
    (LEAGUE, "League"),
    (SUPR, "Supr"),
)
CATEGORIES = tuple(code for code, _ in CATEGORY_CHOICES)

# Gross points always come from the tour table, whatever the tournament category.
GROSS_CATEGORY = TOUR


def to_decimal(value: Any) -> Decimal:
    """
    Convert a configured point value to Decimal.

    Floats go through their string form so 40.625 stays 40.625.
    """
    if isinstance(value, bool):
        raise TypeError("points must be a number, not a boolean")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _read_entry(category: str, entry: Any) -> Tuple[int, Decimal]:
    if isinstance(entry, Mapping):
        position, points = entry.get("position"), entry.get("points")
    else:
        position, points = entry

    try:
        position = int(position)
        points = to_decimal(points)
    except (TypeError, ValueError, InvalidOperation):
        raise ConfigurationError(
            f"Invalid points entry for category '{category}': {entry!r}"
        )

    if not points.is_finite():
        raise ConfigurationError(
            f"Invalid points entry for category '{category}': {entry!r}"
        )
    return position, points


class PointsTable:
    """
    Immutable position -> points lookup per tournament category.

    Built from a configuration snapshot shaped as
    ``{category: [{"position": 1, "points": 500}, ...]}``. Every category in
    ``required`` must be present, positions must run 1..n without gaps and
    points may never increase with position.

    Positions beyond a category's table earn the fallback value: the last
    tabulated value when ``fallback`` is None, otherwise ``fallback`` itself.
    """

    def __init__(self, config: Optional[Mapping[str, Any]], fallback: Any = None, required=CATEGORIES):
        if config is None:
            raise ConfigurationError("Points configuration is missing")

        missing = [category for category in required if category not in config]
        if missing:
            raise ConfigurationError(
                "Points configuration is missing categories: {}".format(", ".join(missing))
            )

        tables = {}
        for category, entries in config.items():
            tables[category] = self._build_table(category, entries)

        self._fallback = self._validate_fallback(fallback, tables)
        self._tables = MappingProxyType(tables)

    @staticmethod
    def _build_table(category: str, entries: Any) -> Tuple[Decimal, ...]:
        if not entries:
            raise ConfigurationError(f"Points table for category '{category}' is empty")

        rows = sorted((_read_entry(category, entry) for entry in entries), key=lambda row: row[0])

        positions = [position for position, _ in rows]
        if positions != list(range(1, len(rows) + 1)):
            raise ConfigurationError(
                f"Positions for category '{category}' must run from 1 to {len(rows)} without gaps"
            )

        points = [value for _, value in rows]
        for position, value in rows:
            if value < 0:
                raise ConfigurationError(
                    f"Points for category '{category}' position {position} cannot be negative"
                )
        for previous, current in zip(rows, rows[1:]):
            if current[1] > previous[1]:
                raise ConfigurationError(
                    f"Points for category '{category}' increase from position {previous[0]} "
                    f"to position {current[0]}"
                )

        return tuple(points)

    @staticmethod
    def _validate_fallback(fallback: Any, tables: Dict[str, Tuple[Decimal, ...]]) -> Optional[Decimal]:
        if fallback is None:
            # the last tabulated value is what finishers past the table earn
            for category, table in tables.items():
                if table[-1] <= 0:
                    raise ConfigurationError(
                        f"Last tabulated points of category '{category}' must be positive "
                        f"when no fallback is configured"
                    )
            return None

        try:
            value = to_decimal(fallback)
        except (TypeError, ValueError, InvalidOperation):
            raise ConfigurationError(f"Invalid fallback points value: {fallback!r}")

        if not value.is_finite() or value <= 0:
            raise ConfigurationError(f"Fallback points must be positive: {fallback!r}")

        for category, table in tables.items():
            if value > table[-1]:
                raise ConfigurationError(
                    f"Fallback points {value} exceed the last tabulated value of category '{category}'"
                )
        return value

    def __contains__(self, category) -> bool:
        return category in self._tables

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._tables.keys())

    def ensure_category(self, category: str) -> Tuple[Decimal, ...]:
        try:
            return self._tables[category]
        except KeyError:
            raise ConfigurationError(f"Unknown tournament category '{category}'")

    def size(self, category: str) -> int:
        return len(self.ensure_category(category))

    def fallback_for(self, category: str) -> Decimal:
        table = self.ensure_category(category)
        if self._fallback is not None:
            return self._fallback
        return table[-1]

    def lookup(self, category: str, position: int) -> Decimal:
        table = self.ensure_category(category)

        if isinstance(position, bool) or not isinstance(position, int):
            raise TypeError(f"position must be an integer, got {position!r}")
        if position < 1:
            raise ValueError(f"position must be 1 or greater, got {position}")

        if position <= len(table):
            return table[position - 1]
        return self.fallback_for(category)

    def as_config(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            category: [
                {"position": index + 1, "points": points} for index, points in enumerate(table)
            ]
            for category, table in self._tables.items()
        }
