from rest_framework import serializers

from .models import PointsTableEntry


class PointsTableEntrySerializer(serializers.ModelSerializer):

    class Meta:
        model = PointsTableEntry
        fields = ("id", "category", "position", "points", )


class PointsEntrySerializer(serializers.Serializer):
    position = serializers.IntegerField(min_value=1)
    points = serializers.DecimalField(max_digits=7, decimal_places=3, min_value=0)


class PointsConfigSerializer(serializers.Serializer):
    """
    Validates a whole configuration: ``{category: [{position, points}, ...]}``.
    """

    def to_internal_value(self, data):
        if not isinstance(data, dict) or len(data) == 0:
            raise serializers.ValidationError("Points configuration must map categories to point tables")

        config = {}
        errors = {}
        for category, entries in data.items():
            entry_serializer = PointsEntrySerializer(data=entries, many=True)
            if entry_serializer.is_valid():
                config[category] = [dict(entry) for entry in entry_serializer.validated_data]
            else:
                errors[category] = entry_serializer.errors

        if errors:
            raise serializers.ValidationError(errors)
        return config

    def to_representation(self, instance):
        return {
            category: PointsEntrySerializer(entries, many=True).data
            for category, entries in instance.items()
        }
