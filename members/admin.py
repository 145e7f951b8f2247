from django.contrib import admin
from .models import Student, Temple

@admin.register(Temple)
class TempleAdmin(admin.ModelAdmin):
    list_display = ("abbreviation", "name", "city", "is_active")
    search_fields = ("name", "abbreviation", "city")

@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "email", "unit", "is_active", "is_guest", "invite_status")
    list_filter = ("unit", "is_active", "is_guest", "invite_status", "is_pending_approval")
    search_fields = ("full_name", "email", "cpf")
    raw_id_fields = ("user",)
