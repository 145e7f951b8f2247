from django.contrib import messages
from django.shortcuts import redirect, render

from accounts.decorators import admin_required
from jobs.tasks import send_bulk_email
from members.models import Student

from .forms import BulkEmailForm
from .models import EmailLog


@admin_required
def bulk_email(request):
    if request.method == "POST":
        form = BulkEmailForm(request.POST)
        if form.is_valid():
            recipients = Student.objects.filter(is_active=True).exclude(email="")
            unit = form.cleaned_data["unit"]
            if unit:
                recipients = recipients.filter(unit=unit)
            ids = list(recipients.values_list("id", flat=True))
            if not ids:
                messages.warning(request, "Nenhum destinatário encontrado.")
            else:
                send_bulk_email.delay(
                    ids, form.cleaned_data["subject"], form.cleaned_data["body"]
                )
                messages.success(request, f"Envio agendado para {len(ids)} membros.")
                return redirect("mailer:bulk_email")
    else:
        form = BulkEmailForm()
    logs = EmailLog.objects.all()[:50]
    return render(
        request,
        "mailer/bulk_email.html",
        {"form": form, "logs": logs, "active_nav": "emails"},
    )
