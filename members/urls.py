from django.urls import path
from . import views

app_name = "members"

urlpatterns = [
    path("alunos/", views.student_list, name="student_list"),
    path("alunos/novo/", views.student_add, name="student_add"),
    path("alunos/<int:student_id>/", views.student_detail, name="student_detail"),
    path("alunos/<int:student_id>/editar/", views.student_edit, name="student_edit"),
    path("alunos/<int:student_id>/excluir/", views.student_delete, name="student_delete"),
    path("alunos/importar/", views.import_upload, name="import_upload"),
    path("alunos/importar/mapeamento/", views.import_mapping, name="import_mapping"),
    path("perfil/", views.profile, name="profile"),
    path("perfil/editar/", views.profile_edit, name="profile_edit"),
    path("fotos/", views.photo_upload, name="photo_upload"),
    path("templos/", views.temple_list, name="temple_list"),
    path("templos/novo/", views.temple_edit, name="temple_add"),
    path("templos/<int:temple_id>/", views.temple_edit, name="temple_edit"),
    path("templos/<int:temple_id>/excluir/", views.temple_delete, name="temple_delete"),
    path("convites/", views.invite_list, name="invite_list"),
    path("convites/<int:student_id>/reenviar/", views.invite_resend, name="invite_resend"),
    path("convites/<int:student_id>/aprovar/", views.invite_approve, name="invite_approve"),
    path("convites/<int:student_id>/rejeitar/", views.invite_reject, name="invite_reject"),
    path("convite/<str:token>/", views.invite_accept, name="invite_accept"),
]
