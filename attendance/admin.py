from django.contrib import admin
from .models import AttendanceRecord

@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ("student", "date", "type", "event")
    list_filter = ("type",)
    raw_id_fields = ("student", "event")
