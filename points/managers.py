from django.db import models, transaction


class PointsTableEntryManager(models.Manager):

    def snapshot(self):
        """
        Read the current configuration as ``{category: [{position, points}]}``.
        """
        config = {}
        for entry in self.get_queryset().order_by("category", "position"):
            config.setdefault(entry.category, []).append({
                "position": entry.position,
                "points": entry.points,
            })
        return config

    def replace_all(self, config):
        """
        Swap the whole configuration for ``config`` in one transaction.
        """
        with transaction.atomic():
            self.get_queryset().delete()
            entries = [
                self.model(category=category, position=entry["position"], points=entry["points"])
                for category, table in config.items()
                for entry in table
            ]
            return self.bulk_create(entries)
