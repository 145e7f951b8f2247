import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import transaction
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required, student_required
from accounts.services import create_login_user, delete_auth_user, split_full_name

from . import importing, invites
from .forms import (
    ImportSourceForm,
    InviteForm,
    PhotoForm,
    ProfileForm,
    RegistrationForm,
    RejectForm,
    StudentForm,
    TempleForm,
)
from .helpers import get_unit_choices, parse_id, status_stage
from .models import Student, Temple
from .photos import PhotoError, save_photo

logger = logging.getLogger(__name__)

IMPORT_SESSION_KEY = "member_import"


def _filtered_students(params):
    qs = Student.objects.select_related("user")
    q = (params.get("q") or "").strip()
    if q:
        qs = qs.filter(Q(full_name__icontains=q) | Q(email__icontains=q))
    unit = params.get("unit")
    if unit:
        qs = qs.filter(unit=unit)
    turma = params.get("turma")
    if turma:
        qs = qs.filter(turma=turma)
    status = params.get("status")
    if status == "active":
        qs = qs.filter(is_active=True, is_guest=False)
    elif status == "inactive":
        qs = qs.filter(is_active=False, is_guest=False)
    elif status == "guest":
        qs = qs.filter(is_guest=True)
    elif status == "pending":
        qs = qs.filter(is_pending_approval=True)
    return qs


@admin_required
def student_list(request):
    students = _filtered_students(request.GET)
    turmas = (
        Student.objects.exclude(turma="")
        .order_by("turma")
        .values_list("turma", flat=True)
        .distinct()
    )
    return render(
        request,
        "members/student_list.html",
        {
            "students": students,
            "units": get_unit_choices(),
            "turmas": turmas,
            "filters": request.GET,
            "active_nav": "students",
        },
    )


@admin_required
def student_add(request):
    if request.method == "POST":
        form = StudentForm(request.POST)
        if form.is_valid():
            with transaction.atomic():
                student = form.save(commit=False)
                first, last = split_full_name(student.full_name)
                user, temp_password = create_login_user(
                    student.email, first, last, is_admin=form.cleaned_data["is_admin"]
                )
                student.user = user
                student.save()
            messages.success(
                request,
                f"Aluno {student.full_name} cadastrado. Senha temporária: {temp_password}",
            )
            return redirect("members:student_detail", student_id=student.id)
    else:
        form = StudentForm()
    return render(
        request,
        "members/student_form.html",
        {"form": form, "active_nav": "students"},
    )


@admin_required
def student_edit(request, student_id):
    student = get_object_or_404(Student, id=student_id)
    if request.method == "POST":
        form = StudentForm(request.POST, instance=student)
        if form.is_valid():
            student = form.save()
            if student.user_id:
                user = student.user
                changed = []
                if user.email != student.email:
                    user.email = student.email
                    changed.append("email")
                if user.is_staff != form.cleaned_data["is_admin"]:
                    user.is_staff = form.cleaned_data["is_admin"]
                    changed.append("is_staff")
                if changed:
                    user.save(update_fields=changed)
            messages.success(request, "Aluno atualizado com sucesso!")
            return redirect("members:student_detail", student_id=student.id)
    else:
        form = StudentForm(instance=student)
    return render(
        request,
        "members/student_form.html",
        {"form": form, "student": student, "active_nav": "students"},
    )


@admin_required
def student_detail(request, student_id):
    student = get_object_or_404(Student, id=student_id)
    records = student.attendance_records.select_related("event").order_by("-date")
    return render(
        request,
        "members/student_detail.html",
        {
            "student": student,
            "records": records,
            "stage": status_stage(student),
            "active_nav": "students",
        },
    )


@admin_required
@require_POST
def student_delete(request, student_id):
    student = get_object_or_404(Student, id=student_id)
    name, email = student.full_name, student.email
    student.delete()
    try:
        delete_auth_user(email)
    except Exception:
        logger.exception("Could not delete login user for %s", email)
    messages.success(request, f"Aluno {name} excluído.")
    return redirect("members:student_list")


@student_required
def profile(request):
    student = request.student
    return render(
        request,
        "members/profile.html",
        {"student": student, "stage": status_stage(student), "active_nav": "profile"},
    )


@student_required
def profile_edit(request):
    student = request.student
    if request.method == "POST":
        form = ProfileForm(request.POST, instance=student)
        if form.is_valid():
            form.save()
            messages.success(request, "Perfil atualizado com sucesso!")
            return redirect("members:profile")
    else:
        form = ProfileForm(instance=student)
    return render(
        request,
        "members/profile_edit.html",
        {"form": form, "photo_form": PhotoForm(), "active_nav": "profile"},
    )


@login_required
@require_POST
def photo_upload(request):
    """Store a cropped photo and attach it to a student record.

    Admins may target any student through ``student_id``; other users only
    update their own record.
    """
    form = PhotoForm(request.POST, request.FILES)
    if not form.is_valid():
        return JsonResponse({"error": "Envie uma imagem válida"}, status=400)
    student_id = parse_id(request.POST.get("student_id"))
    if student_id and request.user.is_staff:
        student = Student.objects.filter(id=student_id).first()
    else:
        student = getattr(request.user, "student", None)
    try:
        name, url = save_photo(form.cleaned_data["photo"], form.crop_box())
    except PhotoError as exc:
        return JsonResponse({"error": str(exc)}, status=400)
    if student is not None:
        student.photo.name = name
        student.save(update_fields=["photo", "updated_at"])
    return JsonResponse({"url": url, "path": name})


@admin_required
def temple_list(request):
    temples = Temple.objects.all()
    return render(
        request,
        "members/temple_list.html",
        {"temples": temples, "fallback_units": get_unit_choices(), "active_nav": "temples"},
    )


@admin_required
def temple_edit(request, temple_id=None):
    temple = get_object_or_404(Temple, id=temple_id) if temple_id else None
    if request.method == "POST":
        form = TempleForm(request.POST, request.FILES, instance=temple)
        if form.is_valid():
            form.save()
            messages.success(request, "Templo salvo com sucesso!")
            return redirect("members:temple_list")
    else:
        form = TempleForm(instance=temple)
    return render(
        request,
        "members/temple_form.html",
        {"form": form, "temple": temple, "active_nav": "temples"},
    )


@admin_required
@require_POST
def temple_delete(request, temple_id):
    temple = get_object_or_404(Temple, id=temple_id)
    temple.delete()
    messages.success(request, "Templo excluído.")
    return redirect("members:temple_list")


@admin_required
def invite_list(request):
    if request.method == "POST":
        form = InviteForm(request.POST)
        if form.is_valid():
            try:
                student, _ = invites.send_invite(
                    invited_by=request.user.email, **form.cleaned_data
                )
            except invites.InviteError as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, f"Convite enviado para {student.email}")
                return redirect("members:invite_list")
    else:
        form = InviteForm()
    invited = Student.objects.exclude(invite_status="").order_by("-invited_at")
    return render(
        request,
        "members/invite_list.html",
        {
            "form": form,
            "invited": invited,
            "reject_form": RejectForm(),
            "active_nav": "invites",
        },
    )


@admin_required
@require_POST
def invite_resend(request, student_id):
    student = get_object_or_404(Student, id=student_id)
    try:
        invites.resend_invite(student)
    except invites.InviteError as exc:
        messages.error(request, str(exc))
    else:
        messages.success(request, f"Convite reenviado para {student.email}")
    return redirect("members:invite_list")


@admin_required
@require_POST
def invite_approve(request, student_id):
    student = get_object_or_404(Student, id=student_id, is_pending_approval=True)
    invites.approve_student(student)
    messages.success(request, f"Cadastro de {student.full_name} aprovado.")
    return redirect("members:invite_list")


@admin_required
@require_POST
def invite_reject(request, student_id):
    student = get_object_or_404(Student, id=student_id)
    form = RejectForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Informe o motivo da rejeição.")
        return redirect("members:invite_list")
    name = student.full_name
    invites.reject_student(student, form.cleaned_data["reason"])
    messages.success(request, f"Cadastro de {name} rejeitado.")
    return redirect("members:invite_list")


def invite_accept(request, token):
    student = invites.get_valid_invite(token)
    if student is None:
        return render(request, "members/invite_invalid.html", status=404)
    if request.method == "POST":
        form = RegistrationForm(request.POST, instance=student)
        if form.is_valid():
            invites.accept_invite(token, form.cleaned_data)
            return render(request, "members/invite_done.html", {"student": student})
    else:
        form = RegistrationForm(instance=student)
    return render(
        request,
        "members/invite_accept.html",
        {"form": form, "student": student, "token": token},
    )


@admin_required
def import_upload(request):
    if request.method == "POST":
        form = ImportSourceForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                if form.cleaned_data.get("csv_file"):
                    headers, rows = importing.parse_csv(form.cleaned_data["csv_file"].read())
                else:
                    headers, rows = importing.fetch_google_sheet(form.cleaned_data["sheet_url"])
            except (importing.MemberImportError, UnicodeDecodeError) as exc:
                messages.error(request, str(exc))
            else:
                request.session[IMPORT_SESSION_KEY] = {"headers": headers, "rows": rows}
                return redirect("members:import_mapping")
    else:
        form = ImportSourceForm()
    return render(
        request,
        "members/import_upload.html",
        {"form": form, "active_nav": "import"},
    )


@admin_required
def import_mapping(request):
    source = request.session.get(IMPORT_SESSION_KEY)
    if not source:
        return redirect("members:import_upload")
    headers, rows = source["headers"], source["rows"]
    if request.method == "POST":
        mapping = {
            field_name: request.POST.get(f"map_{field_name}", "")
            for field_name in importing.IMPORT_FIELDS
        }
        mapping = {k: v for k, v in mapping.items() if v}
        try:
            mapped = importing.map_rows(headers, rows, mapping)
        except importing.MemberImportError as exc:
            messages.error(request, str(exc))
        else:
            if request.POST.get("commit"):
                result = importing.commit_rows(mapped)
                request.session.pop(IMPORT_SESSION_KEY, None)
                return render(
                    request,
                    "members/import_result.html",
                    {"result": result, "active_nav": "import"},
                )
            return render(
                request,
                "members/import_preview.html",
                {
                    "rows": mapped,
                    "mapping": mapping,
                    "fields": importing.IMPORT_FIELDS,
                    "active_nav": "import",
                },
            )
    else:
        mapping = importing.auto_map(headers)
    return render(
        request,
        "members/import_mapping.html",
        {
            "headers": headers,
            "sample": rows[:5],
            "mapping": mapping,
            "fields": importing.IMPORT_FIELDS,
            "active_nav": "import",
        },
    )
