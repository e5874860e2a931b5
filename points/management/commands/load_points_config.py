from django.core.management.base import BaseCommand, CommandError

from points.defaults import default_points_config
from points.exceptions import ConfigurationError
from points.models import PointsTableEntry
from points.tables import PointsTable


class Command(BaseCommand):
    help = 'Load the default league points tables'

    def add_arguments(self, parser):
        parser.add_argument('--force', action='store_true', help='Replace an existing configuration')

    def handle(self, *args, **options):
        if PointsTableEntry.objects.exists() and not options['force']:
            raise CommandError("A points configuration already exists. Use --force to replace it.")

        config = default_points_config()
        try:
            PointsTable(config)
        except ConfigurationError as ex:
            raise CommandError(str(ex))

        entries = PointsTableEntry.objects.replace_all(config)
        self.stdout.write(self.style.SUCCESS(f"Loaded {len(entries)} points table entries"))
