from django.contrib import admin

from points import models


@admin.register(models.PointsTableEntry)
class PointsTableEntryAdmin(admin.ModelAdmin):
    fields = ["category", "position", "points", ]
    list_display = ["category", "position", "points", ]
    list_filter = ("category", )
    ordering = ("category", "position", )
    save_on_top = True
