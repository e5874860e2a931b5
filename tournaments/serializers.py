from collections import Counter

from rest_framework import serializers

from points.results import format_position
from points.tables import CATEGORY_CHOICES
from .models import Tournament, PlayerResult, RecalculationLog, TOURNAMENT_STATUS_CHOICES, \
    RECALCULATION_MODE_CHOICES, BOTH


def position_counts(results):
    """Context for PlayerResultSerializer, so shared positions render as "T2"."""
    results = list(results)
    return {
        "position_counts": Counter(result.position for result in results),
        "gross_position_counts": Counter(result.gross_position for result in results),
    }


class TournamentSerializer(serializers.ModelSerializer):
    player_count = serializers.IntegerField(source="results.count", read_only=True)

    class Meta:
        model = Tournament
        fields = ("id", "name", "date", "category", "points_mode", "status", "created_date", "player_count", )
        read_only_fields = ("id", "points_mode", "created_date", )


class PlayerResultSerializer(serializers.ModelSerializer):
    player_name = serializers.CharField(source="player.name", read_only=True)
    display_position = serializers.SerializerMethodField()
    gross_display_position = serializers.SerializerMethodField()

    class Meta:
        model = PlayerResult
        fields = ("id", "tournament", "player", "player_name", "position", "display_position", "points",
                  "gross_position", "gross_display_position", "gross_points", "gross_score", "net_score",
                  "handicap", )

    def get_display_position(self, obj):
        counts = self.context.get("position_counts", {})
        return format_position(obj.position, counts.get(obj.position, 1) > 1)

    def get_gross_display_position(self, obj):
        if obj.gross_position is None:
            return None
        counts = self.context.get("gross_position_counts", {})
        return format_position(obj.gross_position, counts.get(obj.gross_position, 1) > 1)


class PlayerHistorySerializer(serializers.ModelSerializer):
    tournament_name = serializers.CharField(source="tournament.name", read_only=True)
    tournament_date = serializers.DateField(source="tournament.date", read_only=True)
    category = serializers.CharField(source="tournament.category", read_only=True)

    class Meta:
        model = PlayerResult
        fields = ("id", "tournament", "tournament_name", "tournament_date", "category", "position", "points",
                  "gross_position", "gross_points", "gross_score", "net_score", "handicap", )


class TournamentEntrySerializer(serializers.Serializer):
    """Tournament fields plus result rows, used by process and manual entry."""
    name = serializers.CharField(max_length=120)
    date = serializers.DateField()
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES)
    status = serializers.ChoiceField(choices=TOURNAMENT_STATUS_CHOICES, default="completed")
    results = serializers.ListField(child=serializers.DictField(), allow_empty=True, required=False, default=list)


class PreviewSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES)
    results = serializers.ListField(child=serializers.DictField(), allow_empty=True, required=False, default=list)


class EditTournamentSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=120, required=False)
    date = serializers.DateField(required=False)
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES, required=False)
    status = serializers.ChoiceField(choices=TOURNAMENT_STATUS_CHOICES, required=False)
    results = serializers.ListField(child=serializers.DictField(), allow_empty=True, required=False)


class RecalculationSerializer(serializers.Serializer):
    mode = serializers.ChoiceField(choices=RECALCULATION_MODE_CHOICES, default=BOTH)
    tournament = serializers.IntegerField(required=False, allow_null=True)
    player = serializers.IntegerField(required=False, allow_null=True)
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES, required=False, allow_null=True)
    background = serializers.BooleanField(default=False)

    def validate(self, attrs):
        targets = [key for key in ("tournament", "player", "category") if attrs.get(key) is not None]
        if len(targets) > 1:
            raise serializers.ValidationError("Recalculate a tournament, a player or a category, not several")
        if attrs["background"] and (attrs.get("tournament") is not None or attrs.get("player") is not None):
            raise serializers.ValidationError("Only full or per-category recalculations run in the background")
        return attrs


class RecalculationLogSerializer(serializers.ModelSerializer):
    tournament_name = serializers.CharField(source="tournament.name", read_only=True, default=None)
    player_name = serializers.CharField(source="player.name", read_only=True, default=None)

    class Meta:
        model = RecalculationLog
        fields = ("id", "action", "mode", "tournament", "tournament_name", "player", "player_name",
                  "action_date", "details", )
