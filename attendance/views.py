import datetime
from collections import Counter

from django.contrib import messages
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required, student_required
from events.models import Event
from events.services import upcoming_events
from members.helpers import get_unit_choices, milestones, parse_id, status_stage
from members.models import Student

from .models import AttendanceRecord
from .services import mark_attendance, remove_attendance

PERIODS = {"30": 30, "90": 90, "180": 180}


def event_roster(unit=None, search=""):
    """Non-guest students for the attendance sheet, most assiduous first."""
    qs = Student.objects.filter(is_guest=False).annotate(
        attendance_count=Count("attendance_records")
    )
    if unit:
        qs = qs.filter(unit=unit)
    if search:
        qs = qs.filter(full_name__icontains=search)
    return qs.order_by("-attendance_count", "full_name")


@admin_required
def weekly(request):
    unit = request.GET.get("unit") or None
    events = upcoming_events(unit)
    selected = None
    roster = []
    attended_ids = set()
    event_id = request.GET.get("event")
    if event_id:
        selected = get_object_or_404(Event, id=parse_id(event_id))
        roster_unit = request.GET.get("roster_unit", selected.unit) or None
        roster = event_roster(roster_unit, (request.GET.get("q") or "").strip())
        attended_ids = set(
            selected.eventattendee_set.values_list("student_id", flat=True)
        )
    return render(
        request,
        "attendance/weekly.html",
        {
            "events": events,
            "unit": unit or "",
            "units": get_unit_choices(),
            "selected": selected,
            "roster": roster,
            "attended_ids": attended_ids,
            "total_present": len(attended_ids) + (selected.guest_count if selected else 0),
            "q": request.GET.get("q", ""),
            "active_nav": "attendance",
        },
    )


@admin_required
@require_POST
def mark_event(request, event_id):
    event = get_object_or_404(Event, id=event_id)
    student = get_object_or_404(Student, id=parse_id(request.POST.get("student_id")))
    mark_attendance(student, event.date, AttendanceRecord.TYPE_EVENT, event=event)
    messages.success(request, f"Presença de {student.full_name} registrada.")
    return redirect(f"{reverse('attendance:weekly')}?event={event.id}")


@admin_required
@require_POST
def guest_count(request, event_id):
    event = get_object_or_404(Event, id=event_id)
    try:
        count = max(0, int(request.POST.get("guest_count", 0)))
    except (TypeError, ValueError):
        messages.error(request, "Número de convidados inválido.")
    else:
        event.guest_count = count
        event.save(update_fields=["guest_count"])
        messages.success(request, "Convidados atualizados.")
    return redirect(f"{reverse('attendance:weekly')}?event={event.id}")


@admin_required
@require_POST
def mark(request, student_id):
    student = get_object_or_404(Student, id=student_id)
    att_type = request.POST.get("type")
    try:
        day = datetime.date.fromisoformat(request.POST.get("date") or "")
        mark_attendance(student, day, att_type)
    except ValueError:
        messages.error(request, "Data ou tipo de presença inválido.")
    else:
        messages.success(request, "Presença registrada.")
    return redirect("members:student_detail", student_id=student.id)


@admin_required
@require_POST
def unmark(request, student_id):
    student = get_object_or_404(Student, id=student_id)
    try:
        day = datetime.date.fromisoformat(request.POST.get("date") or "")
    except ValueError:
        messages.error(request, "Data inválida.")
    else:
        remove_attendance(student, day, request.POST.get("type"))
        messages.success(request, "Presença removida.")
    return redirect("members:student_detail", student_id=student.id)


@student_required
def my_attendance(request):
    student = request.student
    records = student.attendance_records.select_related("event")
    all_types = Counter(records.values_list("type", flat=True))
    att_type = request.GET.get("type")
    if att_type:
        records = records.filter(type=att_type)
    period = PERIODS.get(request.GET.get("period", ""))
    if period:
        since = timezone.localdate() - datetime.timedelta(days=period)
        records = records.filter(date__gte=since)
    return render(
        request,
        "attendance/my_attendance.html",
        {
            "records": records.order_by("-date"),
            "counts": {label: all_types.get(key, 0) for key, label in AttendanceRecord.TYPE_CHOICES},
            "types": AttendanceRecord.TYPE_CHOICES,
            "filters": request.GET,
            "active_nav": "attendance",
        },
    )


@student_required
def my_history(request):
    student = request.student
    totals = student.attendance_records.aggregate(
        total=Count("id"),
        events=Count("id", filter=Q(type=AttendanceRecord.TYPE_EVENT)),
    )
    return render(
        request,
        "attendance/my_history.html",
        {
            "student": student,
            "stage": status_stage(student),
            "milestones": milestones(student),
            "totals": totals,
            "active_nav": "history",
        },
    )
