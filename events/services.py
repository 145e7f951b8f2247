import logging

from dateutil.relativedelta import relativedelta
from django.db import transaction
from django.utils import timezone

from .models import DEFAULT_EVENT_TYPE, EVENT_TYPES, Event

logger = logging.getLogger(__name__)

MAX_OCCURRENCES_UNTIL = 100
MAX_OCCURRENCES_OPEN = 4

STEPS = {
    "daily": relativedelta(days=1),
    "weekly": relativedelta(weeks=1),
    "biweekly": relativedelta(weeks=2),
    "monthly": relativedelta(months=1),
    "yearly": relativedelta(years=1),
}


def infer_event_type(title):
    """Match a title against the type labels; returns ``(type, color)``."""
    lower = (title or "").lower()
    for key, (label, color) in EVENT_TYPES.items():
        if label.lower() in lower:
            return key, color
    return DEFAULT_EVENT_TYPE, EVENT_TYPES[DEFAULT_EVENT_TYPE][1]


def occurrence_dates(start, repetition, repeat_until=None):
    """Dates of the extra occurrences after ``start``.

    With ``repeat_until`` up to 100 dates not after it; without, at most 4
    and only inside the start month.
    """
    step = STEPS.get(repetition)
    if step is None:
        return []
    limit = MAX_OCCURRENCES_UNTIL if repeat_until else MAX_OCCURRENCES_OPEN
    dates = []
    for n in range(1, limit + 1):
        current = start + step * n
        if repeat_until and current > repeat_until:
            break
        if not repeat_until and (current.month != start.month or current.year != start.year):
            break
        dates.append(current)
    return dates


@transaction.atomic
def create_event_series(**fields):
    """Create the base event and its repeated children.

    Returns the list of created events, base event first.
    """
    if not fields.get("type"):
        fields["type"], fields["color"] = infer_event_type(fields.get("title"))
    elif not fields.get("color"):
        fields["color"] = EVENT_TYPES.get(fields["type"], EVENT_TYPES[DEFAULT_EVENT_TYPE])[1]
    fields["location"] = fields.get("location") or "Templo"
    base = Event.objects.create(**fields)
    events = [base]
    for day in occurrence_dates(base.date, base.repetition, base.repeat_until):
        child_fields = dict(fields, date=day, parent_event=base)
        events.append(Event.objects.create(**child_fields))
    logger.info("Created event %s with %d occurrences", base.pk, len(events) - 1)
    return events


def upcoming_events(unit=None, today=None):
    today = today or timezone.localdate()
    qs = Event.objects.filter(date__gte=today)
    if unit:
        qs = qs.filter(unit=unit)
    return qs.order_by("date", "time")


def events_with_attendees():
    """All events, newest first, each with ``attendee_ids``."""
    events = list(Event.objects.prefetch_related("eventattendee_set").order_by("-date", "-time"))
    for event in events:
        event.attendee_ids = [a.student_id for a in event.eventattendee_set.all()]
    return events
