import structlog
from django.conf import settings
from rest_framework import viewsets, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from .exceptions import ConfigurationError, InvalidPointsConfigError
from .models import PointsTableEntry
from .serializers import PointsTableEntrySerializer, PointsConfigSerializer
from .tables import CATEGORIES, PointsTable

logger = structlog.get_logger(__name__)


class PointsTableEntryViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = PointsTableEntrySerializer

    def get_queryset(self):
        queryset = PointsTableEntry.objects.all()
        category = self.request.query_params.get("category", None)

        if category is not None:
            queryset = queryset.filter(category=category)

        return queryset.order_by("category", "position")


@api_view(("GET", "PUT"))
@permission_classes((permissions.IsAuthenticatedOrReadOnly,))
def points_config(request):

    if request.method == "GET":
        config = PointsTableEntry.objects.snapshot()
        return Response(PointsConfigSerializer(config).data, status=200)

    if not request.user.is_staff:
        raise PermissionDenied("Only administrators can change the points configuration")

    serializer = PointsConfigSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    config = serializer.validated_data

    unknown = [category for category in config if category not in CATEGORIES]
    if unknown:
        raise InvalidPointsConfigError("Unknown tournament categories: {}".format(", ".join(unknown)))

    try:
        PointsTable(config, fallback=settings.LEAGUE_POINTS_FALLBACK)
    except ConfigurationError as ex:
        raise InvalidPointsConfigError(str(ex))

    PointsTableEntry.objects.replace_all(config)
    logger.info("Points configuration updated", user=request.user.username, categories=list(config.keys()))

    return Response(PointsConfigSerializer(PointsTableEntry.objects.snapshot()).data, status=200)
