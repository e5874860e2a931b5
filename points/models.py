from django.db import models
from django.db.models import UniqueConstraint

from .managers import PointsTableEntryManager
from .tables import CATEGORY_CHOICES


class PointsTableEntry(models.Model):
    category = models.CharField(verbose_name="Tournament category", max_length=10, choices=CATEGORY_CHOICES)
    position = models.PositiveIntegerField(verbose_name="Position")
    points = models.DecimalField(verbose_name="Points", max_digits=7, decimal_places=3)

    objects = PointsTableEntryManager()

    class Meta:
        verbose_name = "Points Table Entry"
        verbose_name_plural = "Points Table"
        ordering = ("category", "position")
        constraints = [
            UniqueConstraint(fields=["category", "position"], name="unique_category_position")
        ]

    def __str__(self):
        return "{} #{}: {} points".format(self.category, self.position, self.points)
