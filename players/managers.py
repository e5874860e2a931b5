from django.db import models


class PlayerManager(models.Manager):

    def find_by_name(self, name):
        if not name:
            return None
        return self.get_queryset().filter(name__iexact=name.strip()).first()

    def find_by_email(self, email):
        if not email:
            return None
        return self.get_queryset().filter(email__iexact=email.strip()).first()

    def find_or_create(self, name, email=None, handicap=None):
        """
        Match a player by email first, then by name, creating one when neither
        matches. Returns a (player, created) tuple.
        """
        player = self.find_by_email(email) or self.find_by_name(name)
        if player is not None:
            return player, False

        player = self.create(
            name=name.strip(),
            email=email.strip().lower() if email else None,
            default_handicap=handicap,
        )
        return player, True
