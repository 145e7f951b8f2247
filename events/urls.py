from django.urls import path
from . import views

app_name = "events"

urlpatterns = [
    path("", views.event_list, name="list"),
    path("proximos/", views.upcoming, name="upcoming"),
    path("novo/", views.event_create, name="create"),
    path("<int:event_id>/", views.event_edit, name="edit"),
    path("<int:event_id>/excluir/", views.event_delete, name="delete"),
]
