from django.contrib import admin
from django.contrib.admin import SimpleListFilter

from core.util import current_season
from .models import Tournament, PlayerResult, RecalculationLog


class CurrentSeasonFilter(SimpleListFilter):
    title = "season"
    parameter_name = "season"

    def lookups(self, request, model_admin):
        year = current_season()
        return [(str(year), str(year)), (str(year - 1), str(year - 1))]

    def queryset(self, request, queryset):
        if self.value():
            return queryset.filter(date__year=self.value())
        else:
            return queryset


class PlayerResultInline(admin.TabularInline):
    model = PlayerResult
    extra = 0
    show_change_link = False
    verbose_name_plural = "Results"
    fields = ["player", "position", "points", "gross_position", "gross_points", "net_score", "gross_score",
              "handicap", ]
    raw_id_fields = ["player", ]


@admin.register(Tournament)
class TournamentAdmin(admin.ModelAdmin):
    fields = ["name", "date", "category", "points_mode", "status", ]
    list_display = ["name", "date", "category", "points_mode", "status", ]
    list_filter = (CurrentSeasonFilter, "category", "points_mode", )
    search_fields = ["name", ]
    inlines = [PlayerResultInline, ]
    save_on_top = True


@admin.register(PlayerResult)
class PlayerResultAdmin(admin.ModelAdmin):
    list_display = ["tournament", "player", "position", "points", "gross_position", "gross_points", ]
    list_filter = ("tournament__category", )
    search_fields = ["player__name", "tournament__name", ]
    raw_id_fields = ["player", "tournament", ]


@admin.register(RecalculationLog)
class RecalculationLogAdmin(admin.ModelAdmin):
    list_display = ["action_date", "action", "mode", "tournament", "player", ]
    list_filter = ("action", "mode", )
    readonly_fields = ["action", "mode", "tournament", "player", "action_date", "details", ]
