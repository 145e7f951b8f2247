from django.urls import path
from . import views

app_name = "attendance"

urlpatterns = [
    path("", views.weekly, name="weekly"),
    path("eventos/<int:event_id>/marcar/", views.mark_event, name="mark_event"),
    path("eventos/<int:event_id>/convidados/", views.guest_count, name="guest_count"),
    path("alunos/<int:student_id>/marcar/", views.mark, name="mark"),
    path("alunos/<int:student_id>/remover/", views.unmark, name="unmark"),
    path("minha/", views.my_attendance, name="mine"),
    path("historico/", views.my_history, name="history"),
]
