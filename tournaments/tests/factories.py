from datetime import date

import factory

from factory.django import DjangoModelFactory

from players.tests.factories import PlayerFactory
from tournaments.models import Tournament, PlayerResult


class TournamentFactory(DjangoModelFactory):
    class Meta:
        model = Tournament

    name = factory.Sequence(lambda n: f"Tournament {n}")
    date = date(2025, 6, 1)
    category = "tour"
    points_mode = "calculated"
    status = "completed"


class PlayerResultFactory(DjangoModelFactory):
    class Meta:
        model = PlayerResult

    tournament = factory.SubFactory(TournamentFactory)
    player = factory.SubFactory(PlayerFactory)
    position = 1
    points = 0
    gross_position = 1
    gross_points = 0
