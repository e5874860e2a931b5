import structlog

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, permissions, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from leaderboards.cache import clear_leaderboards
from points.ties import TieHandler
from .exceptions import InvalidUploadError, UploadError
from .models import Tournament, PlayerResult, RecalculationLog
from .normalization import normalize_rows
from .recalculation import RecalculationService
from .serializers import TournamentSerializer, PlayerResultSerializer, TournamentEntrySerializer, \
    PreviewSerializer, EditTournamentSerializer, RecalculationSerializer, RecalculationLogSerializer, \
    position_counts
from .services import TournamentProcessingService
from .tasks import recalculate_tournaments
from .uploads import read_results_file

logger = structlog.get_logger(__name__)


def _normalized(rows, skip_unscored=True):
    try:
        return normalize_rows(rows, skip_unscored=skip_unscored)
    except UploadError as ex:
        raise InvalidUploadError(str(ex))


def _request_rows(request, results, skip_unscored=True):
    """Result rows come either from an uploaded file or from a JSON list."""
    uploaded_file = request.FILES.get("file")
    if uploaded_file is not None:
        try:
            results = read_results_file(uploaded_file)
        except UploadError as ex:
            raise InvalidUploadError(str(ex))
    return _normalized(results, skip_unscored)


class TournamentViewSet(viewsets.ModelViewSet):
    serializer_class = TournamentSerializer

    def get_queryset(self):
        queryset = Tournament.objects.all()
        category = self.request.query_params.get("category", None)
        season = self.request.query_params.get("season", None)

        if category is not None:
            queryset = queryset.filter(category=category)
        if season is not None:
            queryset = queryset.filter(date__year=season)

        return queryset.order_by("-date", "name")

    def get_permissions(self):
        if self.action in ("list", "retrieve", "results"):
            return [permissions.AllowAny()]
        return [IsAdminUser()]

    def perform_create(self, serializer):
        serializer.save()
        clear_leaderboards()

    def perform_update(self, serializer):
        service = TournamentProcessingService()
        with transaction.atomic():
            tournament = serializer.save()
            if not tournament.is_manual:
                service.rescore(tournament)
        clear_leaderboards()

    def perform_destroy(self, instance):
        logger.info("Tournament deleted", tournament=instance.name)
        instance.delete()
        clear_leaderboards()

    @action(detail=True, methods=["get"])
    def results(self, request, pk):
        tournament = get_object_or_404(Tournament, pk=pk)
        results = list(PlayerResult.objects.filter(tournament=tournament).select_related("player")
                       .order_by("position", "player__name"))
        serializer = PlayerResultSerializer(results, many=True, context=position_counts(results))
        return Response(serializer.data)

    @action(detail=False, methods=["post"])
    def upload(self, request):
        """
        Read an uploaded results file and return its normalized rows, with
        any tie or position problems in the uploaded positions.
        """
        uploaded_file = request.FILES.get("file")
        if uploaded_file is None:
            raise InvalidUploadError("No file was uploaded")

        rows = _request_rows(request, [])
        positioned = [(row.position, row.net_score) for row in rows if row.position is not None]
        valid, issues = TieHandler.validate_positions(positioned)

        return Response({
            "file_name": uploaded_file.name,
            "results": [row.to_dict() for row in rows],
            "has_ties": TieHandler.detect_existing_ties(position for position, _ in positioned),
            "positions_valid": valid,
            "position_issues": issues,
        }, status=200)

    @action(detail=False, methods=["post"])
    def preview(self, request):
        serializer = PreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rows = _request_rows(request, serializer.validated_data["results"])

        preview = TournamentProcessingService().preview(serializer.validated_data["category"], rows)
        return Response(preview, status=200)

    @action(detail=False, methods=["post"])
    def process(self, request):
        serializer = TournamentEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        rows = _request_rows(request, data["results"])

        tournament = TournamentProcessingService().process(
            data["name"], data["date"], data["category"], rows, data["status"]
        )
        return Response(TournamentSerializer(tournament).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="manual-entry")
    def manual_entry(self, request):
        serializer = TournamentEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        rows = _normalized(data["results"], skip_unscored=False)

        tournament = TournamentProcessingService().manual_entry(
            data["name"], data["date"], data["category"], rows, data["status"]
        )
        return Response(TournamentSerializer(tournament).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["put"])
    def edit(self, request, pk):
        tournament = get_object_or_404(Tournament, pk=pk)
        serializer = EditTournamentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        rows = None
        if "results" in data:
            rows = _normalized(data["results"], skip_unscored=False)

        tournament = TournamentProcessingService().edit(tournament, data, rows)
        return Response(TournamentSerializer(tournament).data, status=200)


@api_view(("POST",))
@permission_classes((IsAdminUser,))
def recalculate(request):
    serializer = RecalculationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    service = RecalculationService()

    if data.get("tournament") is not None:
        get_object_or_404(Tournament, pk=data["tournament"])
        result = service.recalculate_tournament(data["tournament"], data["mode"])
    elif data.get("player") is not None:
        result = service.recalculate_player(data["player"], data["mode"])
    elif data["background"]:
        task = recalculate_tournaments.delay(mode=data["mode"], category=data.get("category"))
        logger.info("Recalculation queued", user=request.user.username, task_id=task.id, mode=data["mode"])
        return Response({"task_id": task.id, "mode": data["mode"]}, status=status.HTTP_202_ACCEPTED)
    else:
        result = service.recalculate_all(data["mode"], data.get("category"))

    logger.info("Recalculation requested", user=request.user.username, action=result.action, mode=result.mode)
    return Response(result.to_dict(), status=200)


class RecalculationLogViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = RecalculationLogSerializer
    permission_classes = (IsAdminUser,)

    def get_queryset(self):
        queryset = RecalculationLog.objects.select_related("tournament", "player")
        tournament_id = self.request.query_params.get("tournament", None)

        if tournament_id is not None:
            queryset = queryset.filter(tournament=tournament_id)

        return queryset.order_by("-action_date", "-id")
