import calendar
from collections import Counter

from django.utils import timezone

from attendance.models import AttendanceRecord
from cohorts.models import CohortMember
from events.models import Event
from members.helpers import (
    development_progress,
    get_unit_choices,
    internship_progress,
    status_stage,
)
from members.models import Student
from payments.services import is_month_paid


def admin_dashboard(unit=None):
    """Counts and current-month calendar for the admin home page."""
    students = Student.objects.all()
    today = timezone.localdate()
    stats = {
        "active": students.filter(is_active=True, is_guest=False).count(),
        "inactive": students.filter(is_active=False, is_guest=False).count(),
        "guests": students.filter(is_guest=True).count(),
        "events": Event.objects.filter(parent_event__isnull=True).count(),
    }

    month_events = Event.objects.filter(date__year=today.year, date__month=today.month)
    month_records = AttendanceRecord.objects.filter(date__year=today.year, date__month=today.month)
    if unit:
        month_events = month_events.filter(unit=unit)
        month_records = month_records.filter(student__unit=unit)

    attendance_by_day = Counter(month_records.values_list("date__day", flat=True))
    events_by_day = {}
    for event in month_events.order_by("date", "time"):
        events_by_day.setdefault(event.date.day, []).append(event)

    first_weekday, days_in_month = calendar.monthrange(today.year, today.month)
    days = [
        {
            "day": day,
            "is_today": day == today.day,
            "attendance": attendance_by_day.get(day, 0),
            "events": events_by_day.get(day, []),
        }
        for day in range(1, days_in_month + 1)
    ]
    return {
        "stats": stats,
        "unit": unit or "",
        "units": get_unit_choices(),
        "month": today.replace(day=1),
        # Calendar weeks start on Sunday
        "leading_blanks": range((first_weekday + 1) % 7),
        "days": days,
    }


def student_dashboard(student):
    today = timezone.localdate()
    records = list(student.attendance_records.all())
    membership = (
        CohortMember.objects.select_related("cohort")
        .filter(student=student)
        .order_by("-cohort__start_date")
        .first()
    )
    upcoming = (
        Event.objects.filter(date__gte=today, unit=student.unit)
        .order_by("date", "time")[:5]
    )
    return {
        "student": student,
        "stage": status_stage(student),
        "development_progress": development_progress(student, records),
        "internship_progress": internship_progress(student, records),
        "attendance_count": len(records),
        "cohort": membership.cohort if membership else None,
        "monthly_paid": is_month_paid(student, today),
        "upcoming_events": upcoming,
    }
