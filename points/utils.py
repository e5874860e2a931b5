from django.conf import settings

from .models import PointsTableEntry
from .tables import PointsTable


def load_points_table():
    """
    Build a PointsTable from the stored configuration.

    Raises ConfigurationError when the stored tables are incomplete or invalid.
    """
    return PointsTable(PointsTableEntry.objects.snapshot(), fallback=settings.LEAGUE_POINTS_FALLBACK)
