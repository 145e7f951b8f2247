from django.contrib import admin
from .models import Cohort, CohortMember, Lesson

class LessonInline(admin.TabularInline):
    model = Lesson
    extra = 0

@admin.register(Cohort)
class CohortAdmin(admin.ModelAdmin):
    list_display = ("number", "unit", "status", "start_date", "fee")
    list_filter = ("unit", "status")
    inlines = [LessonInline]

admin.site.register(CohortMember)
