from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required, student_required
from members.helpers import parse_id
from members.models import Student

from .forms import CohortForm, LessonForm
from .models import Cohort, CohortMember, Lesson


@admin_required
def cohort_list(request):
    cohorts = Cohort.objects.prefetch_related("students")
    status = request.GET.get("status")
    if status:
        cohorts = cohorts.filter(status=status)
    q = (request.GET.get("q") or "").strip()
    if q.isdigit():
        cohorts = cohorts.filter(number=int(q))
    return render(
        request,
        "cohorts/cohort_list.html",
        {
            "cohorts": cohorts,
            "statuses": Cohort.STATUS_CHOICES,
            "filters": request.GET,
            "active_nav": "cohorts",
        },
    )


@admin_required
def cohort_edit(request, cohort_id=None):
    cohort = get_object_or_404(Cohort, id=cohort_id) if cohort_id else None
    if request.method == "POST":
        form = CohortForm(request.POST, instance=cohort)
        if form.is_valid():
            cohort = form.save()
            messages.success(request, "Turma salva com sucesso!")
            return redirect("cohorts:detail", cohort_id=cohort.id)
    else:
        form = CohortForm(instance=cohort)
    return render(
        request,
        "cohorts/cohort_form.html",
        {"form": form, "cohort": cohort, "active_nav": "cohorts"},
    )


@admin_required
def cohort_detail(request, cohort_id):
    cohort = get_object_or_404(Cohort, id=cohort_id)
    members = cohort.students.order_by("full_name")
    candidates = Student.objects.filter(unit=cohort.unit, is_guest=False).exclude(
        id__in=members.values_list("id", flat=True)
    )
    return render(
        request,
        "cohorts/cohort_detail.html",
        {
            "cohort": cohort,
            "members": members,
            "candidates": candidates,
            "lessons": cohort.lessons.all(),
            "lesson_form": LessonForm(),
            "active_nav": "cohorts",
        },
    )


@admin_required
@require_POST
def cohort_delete(request, cohort_id):
    get_object_or_404(Cohort, id=cohort_id).delete()
    messages.success(request, "Turma excluída.")
    return redirect("cohorts:list")


@admin_required
@require_POST
def add_student(request, cohort_id):
    cohort = get_object_or_404(Cohort, id=cohort_id)
    student = get_object_or_404(Student, id=parse_id(request.POST.get("student_id")))
    _, created = CohortMember.objects.get_or_create(cohort=cohort, student=student)
    if not created:
        messages.info(request, f"{student.full_name} já está nesta turma.")
    else:
        student.turma = f"Turma {cohort.number}"
        student.save(update_fields=["turma", "updated_at"])
        messages.success(request, f"{student.full_name} adicionado à turma.")
    return redirect("cohorts:detail", cohort_id=cohort.id)


@admin_required
@require_POST
def remove_student(request, cohort_id, student_id):
    CohortMember.objects.filter(cohort_id=cohort_id, student_id=student_id).delete()
    messages.success(request, "Aluno removido da turma.")
    return redirect("cohorts:detail", cohort_id=cohort_id)


@admin_required
def lesson_edit(request, cohort_id, lesson_id=None):
    cohort = get_object_or_404(Cohort, id=cohort_id)
    lesson = get_object_or_404(Lesson, id=lesson_id, cohort=cohort) if lesson_id else None
    if request.method == "POST":
        form = LessonForm(request.POST, instance=lesson)
        if form.is_valid():
            lesson = form.save(commit=False)
            lesson.cohort = cohort
            lesson.save()
            messages.success(request, "Aula salva com sucesso!")
            return redirect("cohorts:detail", cohort_id=cohort.id)
    else:
        form = LessonForm(instance=lesson)
    return render(
        request,
        "cohorts/lesson_form.html",
        {"form": form, "cohort": cohort, "lesson": lesson, "active_nav": "cohorts"},
    )


@admin_required
@require_POST
def lesson_delete(request, cohort_id, lesson_id):
    Lesson.objects.filter(id=lesson_id, cohort_id=cohort_id).delete()
    messages.success(request, "Aula excluída.")
    return redirect("cohorts:detail", cohort_id=cohort_id)


@student_required
def my_lessons(request):
    membership = (
        CohortMember.objects.select_related("cohort")
        .filter(student=request.student)
        .order_by("-cohort__start_date")
        .first()
    )
    cohort = membership.cohort if membership else None
    lessons = list(cohort.lessons.all()) if cohort else []
    return render(
        request,
        "cohorts/my_lessons.html",
        {
            "cohort": cohort,
            "lessons": lessons,
            "done_count": sum(1 for lesson in lessons if lesson.done),
            "active_nav": "lessons",
        },
    )
