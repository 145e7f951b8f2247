from django.urls import path
from . import views

app_name = "cohorts"

urlpatterns = [
    path("", views.cohort_list, name="list"),
    path("nova/", views.cohort_edit, name="create"),
    path("<int:cohort_id>/", views.cohort_detail, name="detail"),
    path("<int:cohort_id>/editar/", views.cohort_edit, name="edit"),
    path("<int:cohort_id>/excluir/", views.cohort_delete, name="delete"),
    path("<int:cohort_id>/alunos/", views.add_student, name="add_student"),
    path("<int:cohort_id>/alunos/<int:student_id>/remover/", views.remove_student, name="remove_student"),
    path("<int:cohort_id>/aulas/nova/", views.lesson_edit, name="lesson_create"),
    path("<int:cohort_id>/aulas/<int:lesson_id>/", views.lesson_edit, name="lesson_edit"),
    path("<int:cohort_id>/aulas/<int:lesson_id>/excluir/", views.lesson_delete, name="lesson_delete"),
    path("minhas-aulas/", views.my_lessons, name="my_lessons"),
]
