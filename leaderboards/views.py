from rest_framework import permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from points.results import GROSS, NET
from .cache import get_leaderboard
from .serializers import LeaderboardEntrySerializer


@api_view(("GET",))
@permission_classes((permissions.AllowAny,))
def net_leaderboard(request):
    serializer = LeaderboardEntrySerializer(get_leaderboard(NET), many=True)
    return Response(serializer.data, status=200)


@api_view(("GET",))
@permission_classes((permissions.AllowAny,))
def gross_leaderboard(request):
    serializer = LeaderboardEntrySerializer(get_leaderboard(GROSS), many=True)
    return Response(serializer.data, status=200)
