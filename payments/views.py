from django.shortcuts import render

from accounts.decorators import student_required

from .services import is_month_paid, monthly_charge, payment_history


@student_required
def index(request):
    student = request.student
    history = payment_history(student)
    ctx = {
        "history": history,
        "total_paid": sum((p.amount for p in history), start=0),
        "current_month_paid": is_month_paid(student),
        "active_nav": "payments",
    }
    if request.GET.get("pix"):
        ctx["charge"] = monthly_charge()
    return render(request, "payments/index.html", ctx)
