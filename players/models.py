from django.db import models

from .managers import PlayerManager


class Player(models.Model):
    name = models.CharField(verbose_name="Name", max_length=100, unique=True)
    email = models.CharField(verbose_name="Email", unique=True, max_length=200, blank=True, null=True)
    default_handicap = models.DecimalField(verbose_name="Default handicap", max_digits=5, decimal_places=2,
                                           blank=True, null=True)
    created_date = models.DateTimeField(verbose_name="Created date", auto_now_add=True)

    objects = PlayerManager()

    class Meta:
        ordering = ("name", )

    def __str__(self):
        return self.name
