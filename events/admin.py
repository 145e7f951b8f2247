from django.contrib import admin
from .models import Event, EventAttendee

@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "date", "time", "unit", "type", "parent_event")
    list_filter = ("unit", "type", "repetition")
    search_fields = ("title",)

@admin.register(EventAttendee)
class EventAttendeeAdmin(admin.ModelAdmin):
    list_display = ("event", "student", "created_at")
    raw_id_fields = ("event", "student")
