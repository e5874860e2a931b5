import factory

from factory.django import DjangoModelFactory

from players.models import Player


class PlayerFactory(DjangoModelFactory):
    class Meta:
        model = Player

    name = factory.Sequence(lambda n: f"Player {n}")
    email = factory.LazyAttribute(lambda p: "{}@league.no".format(p.name.lower().replace(" ", ".")))
    default_handicap = None
