from django.contrib import admin

from .models import Player


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    fields = ["name", "email", "default_handicap", ]
    list_display = ["name", "email", "default_handicap", "created_date", ]
    search_fields = ["name", "email", ]
    ordering = ["name", ]
    save_on_top = True
