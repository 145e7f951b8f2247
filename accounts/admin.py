from django.contrib import admin
from .models import User

@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "is_active", "is_staff", "must_change_password", "last_login")
    list_filter = ("is_staff", "must_change_password")
    search_fields = ("email", "first_name", "last_name")
