from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from accounts import views as accounts_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("django-rq/", include("django_rq.urls")),
    path("accounts/", include("allauth.urls")),
    path("", accounts_views.home, name="home"),
    # app URLs
    path("conta/", include("accounts.urls")),
    path("", include("members.urls")),
    path("eventos/", include("events.urls")),
    path("presenca/", include("attendance.urls")),
    path("turmas/", include("cohorts.urls")),
    path("pagamentos/", include("payments.urls")),
    path("emails/", include("mailer.urls")),
    # JSON endpoints
    path("api/delete-auth-user/", accounts_views.delete_auth_user, name="delete_auth_user"),
    path("api/send-email/", include("mailer.api_urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
