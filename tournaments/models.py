from django.db import models
from django.db.models import CASCADE, SET_NULL, UniqueConstraint

from players.models import Player
from points.tables import CATEGORY_CHOICES

CALCULATED = "calculated"
MANUAL = "manual"
POINTS_MODE_CHOICES = (
    (CALCULATED, "Calculated"),
    (MANUAL, "Manually assigned"),
)
TOURNAMENT_STATUS_CHOICES = (
    ("scheduled", "Scheduled"),
    ("completed", "Completed"),
)
BOTH = "both"
RECALCULATION_MODE_CHOICES = (
    ("net", "Net"),
    ("gross", "Gross"),
    (BOTH, "Net and Gross"),
)
RECALCULATION_MODES = tuple(code for code, _ in RECALCULATION_MODE_CHOICES)


class Tournament(models.Model):
    name = models.CharField(verbose_name="Tournament name", max_length=120)
    date = models.DateField(verbose_name="Date")
    category = models.CharField(verbose_name="Category", max_length=10, choices=CATEGORY_CHOICES)
    points_mode = models.CharField(verbose_name="Points mode", max_length=10, choices=POINTS_MODE_CHOICES,
                                   default=CALCULATED)
    status = models.CharField(verbose_name="Status", max_length=10, choices=TOURNAMENT_STATUS_CHOICES,
                              default="completed")
    created_date = models.DateTimeField(verbose_name="Created date", auto_now_add=True)

    class Meta:
        ordering = ("-date", "name")

    def __str__(self):
        return "{} ({})".format(self.name, self.date)

    @property
    def is_manual(self):
        return self.points_mode == MANUAL


class PlayerResult(models.Model):
    tournament = models.ForeignKey(verbose_name="Tournament", to=Tournament, on_delete=CASCADE,
                                   related_name="results")
    player = models.ForeignKey(verbose_name="Player", to=Player, on_delete=CASCADE, related_name="results")
    position = models.IntegerField(verbose_name="Net position")
    points = models.DecimalField(verbose_name="Net points", max_digits=7, decimal_places=2, default=0)
    gross_position = models.IntegerField(verbose_name="Gross position", blank=True, null=True)
    gross_points = models.DecimalField(verbose_name="Gross points", max_digits=7, decimal_places=2, default=0)
    gross_score = models.DecimalField(verbose_name="Gross score", max_digits=6, decimal_places=2,
                                      blank=True, null=True)
    net_score = models.DecimalField(verbose_name="Net score", max_digits=6, decimal_places=2,
                                    blank=True, null=True)
    handicap = models.DecimalField(verbose_name="Course handicap", max_digits=5, decimal_places=2,
                                   blank=True, null=True)
    created_date = models.DateTimeField(verbose_name="Created date", auto_now_add=True)

    class Meta:
        ordering = ("tournament", "position")
        constraints = [
            UniqueConstraint(fields=["tournament", "player"], name="unique_tournament_player")
        ]

    def __str__(self):
        return "{}: {} ({})".format(self.tournament, self.player, self.position)


class RecalculationLog(models.Model):
    action = models.CharField(verbose_name="Action", max_length=30)
    mode = models.CharField(verbose_name="Mode", max_length=5, choices=RECALCULATION_MODE_CHOICES)
    tournament = models.ForeignKey(verbose_name="Tournament", to=Tournament, null=True, blank=True,
                                   on_delete=SET_NULL, related_name="recalculation_logs")
    player = models.ForeignKey(verbose_name="Player", to=Player, null=True, blank=True, on_delete=SET_NULL)
    action_date = models.DateTimeField(verbose_name="Date", auto_now_add=True)
    details = models.TextField(verbose_name="Serialized Details", null=True, blank=True)

    class Meta:
        ordering = ("-action_date", "-id")

    def __str__(self):
        return "{} ({}) {}".format(self.action, self.mode, self.action_date)
