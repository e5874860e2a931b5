from django.contrib import admin
from django.urls import path, include
from rest_framework.authtoken.views import obtain_auth_token
from rest_framework.routers import DefaultRouter

from leaderboards import views as leaderboard_views
from players import views as player_views
from points import views as points_views
from tournaments import views as tournament_views

admin.site.site_header = "Golf League Administration"

# Create a router and register our viewsets with it.
router = DefaultRouter()
router.register(r"players", player_views.PlayerViewSet, "players")
router.register(r"points-table", points_views.PointsTableEntryViewSet, "points-table")
router.register(r"recalculation-logs", tournament_views.RecalculationLogViewSet, "recalculation-logs")
router.register(r"tournaments", tournament_views.TournamentViewSet, "tournaments")

urlpatterns = [
      path("admin/", admin.site.urls),
      path("api/", include(router.urls)),
      path("api/points-config/", points_views.points_config),
      path("api/recalculate/", tournament_views.recalculate),
      path("api/leaderboard/net/", leaderboard_views.net_leaderboard),
      path("api/leaderboard/gross/", leaderboard_views.gross_leaderboard),
      path("auth/token/login/", obtain_auth_token, name="login"),
  ]
