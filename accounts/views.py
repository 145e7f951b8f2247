import logging

from django.contrib import messages
from django.contrib.auth import update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from .dashboards import admin_dashboard, student_dashboard
from .forms import ChangePasswordForm
from .services import complete_password_change, delete_auth_user as remove_login_user

logger = logging.getLogger(__name__)


def home(request):
    if not request.user.is_authenticated:
        return redirect("account_login")
    if request.user.is_staff:
        unit = request.GET.get("unit") or None
        ctx = admin_dashboard(unit)
        ctx["active_nav"] = "dashboard"
        return render(request, "dashboard/admin.html", ctx)
    student = getattr(request.user, "student", None)
    if student is None:
        return render(request, "dashboard/no_student.html", {"active_nav": "dashboard"})
    ctx = student_dashboard(student)
    ctx["active_nav"] = "dashboard"
    return render(request, "dashboard/student.html", ctx)


@login_required
def change_password(request):
    if request.method == "POST":
        form = ChangePasswordForm(request.user, request.POST)
        if form.is_valid():
            complete_password_change(request.user, form.cleaned_data["new_password"])
            update_session_auth_hash(request, request.user)
            messages.success(request, "Senha alterada com sucesso!")
            return redirect("home")
    else:
        form = ChangePasswordForm(request.user)
    return render(
        request,
        "accounts/change_password.html",
        {
            "form": form,
            "forced": request.user.must_change_password,
            "active_nav": "password",
        },
    )


@api_view(["POST"])
@permission_classes([IsAdminUser])
def delete_auth_user(request):
    email = request.data.get("email") if hasattr(request.data, "get") else None
    if not email:
        return Response({"error": "Email é obrigatório"}, status=status.HTTP_400_BAD_REQUEST)
    if not remove_login_user(email):
        return Response(
            {"success": True, "message": "Usuário não encontrado na autenticação"}
        )
    return Response({"success": True, "message": "Usuário excluído com sucesso da autenticação"})
