from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required
from members.helpers import get_unit_choices

from .forms import EventForm
from .models import EVENT_TYPES, Event
from .services import create_event_series, events_with_attendees, infer_event_type, upcoming_events


@admin_required
def event_list(request):
    return render(
        request,
        "events/event_list.html",
        {"events": events_with_attendees(), "event_types": EVENT_TYPES, "active_nav": "events"},
    )


@login_required
def upcoming(request):
    unit = request.GET.get("unit")
    student = getattr(request.user, "student", None)
    if unit is None and student is not None:
        unit = student.unit
    return render(
        request,
        "events/upcoming.html",
        {
            "events": upcoming_events(unit or None),
            "unit": unit or "",
            "units": get_unit_choices(),
            "active_nav": "calendar",
        },
    )


@admin_required
def event_create(request):
    if request.method == "POST":
        form = EventForm(request.POST)
        if form.is_valid():
            events = create_event_series(**form.cleaned_data)
            if len(events) > 1:
                messages.success(request, f"{len(events)} eventos criados com sucesso!")
            else:
                messages.success(request, "Evento criado com sucesso!")
            return redirect("events:list")
    else:
        form = EventForm()
    return render(request, "events/event_form.html", {"form": form, "active_nav": "events"})


@admin_required
def event_edit(request, event_id):
    event = get_object_or_404(Event, id=event_id)
    if request.method == "POST":
        form = EventForm(request.POST, instance=event)
        if form.is_valid():
            event = form.save(commit=False)
            if form.cleaned_data.get("type"):
                event.color = EVENT_TYPES[event.type][1]
            else:
                event.type, event.color = infer_event_type(event.title)
            event.save()
            messages.success(request, "Evento atualizado com sucesso!")
            return redirect("events:list")
    else:
        form = EventForm(instance=event)
    return render(
        request,
        "events/event_form.html",
        {"form": form, "event": event, "active_nav": "events"},
    )


@admin_required
@require_POST
def event_delete(request, event_id):
    event = get_object_or_404(Event, id=event_id)
    event.delete()
    messages.success(request, "Evento excluído.")
    return redirect("events:list")
