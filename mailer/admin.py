from django.contrib import admin
from .models import EmailLog

@admin.register(EmailLog)
class EmailLogAdmin(admin.ModelAdmin):
    list_display = ("id", "to", "subject", "status", "provider_id", "created_at")
    list_filter = ("status",)
    search_fields = ("to", "subject", "provider_id")
