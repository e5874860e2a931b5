from django.db.models import Q
from rest_framework import viewsets, permissions
from rest_framework.decorators import action
from rest_framework.response import Response

from tournaments.models import PlayerResult
from tournaments.serializers import PlayerHistorySerializer
from .models import Player
from .serializers import PlayerSerializer


class PlayerViewSet(viewsets.ModelViewSet):
    serializer_class = PlayerSerializer

    def get_queryset(self):
        queryset = Player.objects.all()
        search = self.request.query_params.get("search", None)

        if search is not None and search.strip():
            term = search.strip()
            queryset = queryset.filter(Q(name__icontains=term) | Q(email__icontains=term))

        return queryset.order_by("name")

    def get_permissions(self):
        if self.action in ("list", "retrieve", "history"):
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    @action(detail=True, methods=["get"])
    def history(self, request, pk):
        player = self.get_object()
        results = PlayerResult.objects \
            .filter(player=player) \
            .select_related("tournament") \
            .order_by("-tournament__date", "tournament__name")
        serializer = PlayerHistorySerializer(results, many=True)
        return Response(serializer.data)
