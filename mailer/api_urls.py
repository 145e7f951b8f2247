from django.urls import path
from . import api

urlpatterns = [
    path("", api.send_email, name="send_email_api"),
]
