import logging

from django.db import IntegrityError, transaction

from events.models import EventAttendee

from .models import AttendanceRecord

logger = logging.getLogger(__name__)


def mark_attendance(student, date, type, event=None):
    """Record attendance once; repeated calls return the existing record.

    Event attendance also registers the student as an event attendee.
    """
    if type not in dict(AttendanceRecord.TYPE_CHOICES):
        raise ValueError(f"unknown attendance type: {type}")
    lookup = {"student": student, "date": date, "type": type}
    if event is None:
        lookup["event__isnull"] = True
    else:
        lookup["event"] = event
    record = AttendanceRecord.objects.filter(**lookup).first()
    if record is not None:
        return record
    try:
        with transaction.atomic():
            record = AttendanceRecord.objects.create(
                student=student, date=date, type=type, event=event
            )
    except IntegrityError:
        # lost a race with a concurrent insert
        return AttendanceRecord.objects.get(**lookup)
    if type == AttendanceRecord.TYPE_EVENT and event is not None:
        EventAttendee.objects.get_or_create(event=event, student=student)
    logger.info("Attendance %s on %s for student %s", type, date, student.pk)
    return record


def remove_attendance(student, date, type):
    deleted, _ = AttendanceRecord.objects.filter(student=student, date=date, type=type).delete()
    return deleted
