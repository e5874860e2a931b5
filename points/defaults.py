"""
Default league point tables, loaded by ``manage.py load_points_config``.
"""
from .tables import LEAGUE, MAJOR, SUPR, TOUR

MAJOR_POINTS = (
    "750", "400", "350", "325", "300", "275", "225", "200", "175", "150",
    "130", "120", "110", "90", "80", "70", "65", "60", "55", "50",
    "48", "46", "44", "42", "40", "38", "36", "34", "32.5", "31",
    "29.5", "28", "26.5", "25", "24", "23", "22", "21", "20.25", "19.5",
    "18.75", "18", "17.25", "16.5", "15.75", "15", "14.25", "13.5", "13", "12.5",
    "12", "11.5", "11", "10.5", "10", "9.5", "9", "8.5", "8", "7.75",
    "7.5", "7.25", "7",
)

TOUR_POINTS = (
    "500", "300", "190", "135", "110", "100", "90", "85", "80", "75",
    "70", "65", "60", "55", "53", "51", "49", "47", "45", "43",
    "41", "39", "37", "35.5", "34", "32.5", "31", "29.5", "28", "26.5",
    "25", "23.5", "22", "21", "20", "19", "18", "17", "16", "15",
    "14", "13", "12", "11", "10.5", "10", "9.5", "9", "8.5", "8",
    "7.5", "7", "6.5", "6", "5.8", "5.6", "5.4", "5.2", "5", "4.8",
    "4.6", "4.4", "4.2", "4", "3.8",
)

# league and supr events share one table
LEAGUE_SUPR_POINTS = (
    "93.75", "50", "43.75", "40.625", "37.5", "34.375", "28.125", "25", "21.875", "18.75",
    "16.25", "15", "13.75", "11.25", "10", "8.75", "8.125", "7.5", "6.875", "6",
)


def _entries(points):
    return [{"position": index + 1, "points": value} for index, value in enumerate(points)]


def default_points_config():
    return {
        MAJOR: _entries(MAJOR_POINTS),
        TOUR: _entries(TOUR_POINTS),
        LEAGUE: _entries(LEAGUE_SUPR_POINTS),
        SUPR: _entries(LEAGUE_SUPR_POINTS),
    }
