from rest_framework import serializers


class LeaderboardPlayerSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    default_handicap = serializers.DecimalField(max_digits=5, decimal_places=2, allow_null=True)


class LeaderboardEntrySerializer(serializers.Serializer):
    rank = serializers.IntegerField()
    player = LeaderboardPlayerSerializer()
    total_points = serializers.DecimalField(max_digits=9, decimal_places=2)
    category_points = serializers.DictField(child=serializers.DecimalField(max_digits=9, decimal_places=2))
    major_points = serializers.DecimalField(max_digits=9, decimal_places=2)
    tour_points = serializers.DecimalField(max_digits=9, decimal_places=2)
    total_events = serializers.IntegerField()
    average_net_score = serializers.DecimalField(max_digits=6, decimal_places=2, allow_null=True)
    average_gross_score = serializers.DecimalField(max_digits=6, decimal_places=2, allow_null=True)
    average_score = serializers.DecimalField(max_digits=6, decimal_places=2, allow_null=True)
    top_total_points = serializers.DecimalField(max_digits=9, decimal_places=2)
    top_major_points = serializers.DecimalField(max_digits=9, decimal_places=2)
    top_tour_points = serializers.DecimalField(max_digits=9, decimal_places=2)
