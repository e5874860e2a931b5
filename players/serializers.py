from rest_framework import serializers

from .models import Player


class PlayerSerializer(serializers.ModelSerializer):

    class Meta:
        model = Player
        fields = ("id", "name", "email", "default_handicap", "created_date", )
        read_only_fields = ("id", "created_date", )

    def validate_name(self, value):
        name = value.strip()
        existing = Player.objects.filter(name__iexact=name)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError("A player with this name already exists")
        return name

    def validate_email(self, value):
        if not value:
            return None
        return value.strip().lower()
