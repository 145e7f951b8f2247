"""Shared fixtures for the Nosso Templo test suite."""

import datetime

import pytest

from accounts.models import User
from members.models import Student

PASSWORD = "Segredo#2025"
BACKEND = "django.contrib.auth.backends.ModelBackend"


@pytest.fixture(autouse=True)
def test_settings(settings, tmp_path):
    """Fast hashing, real (locmem) delivery and a throwaway media root."""
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    settings.EMAIL_SIMULATE = False
    settings.MEDIA_ROOT = str(tmp_path / "media")
    settings.SITE_URL = "http://testserver"
    settings.AXES_ENABLED = False


@pytest.fixture
def admin_user(db) -> User:
    return User.objects.create_user(
        email="admin@nossotemplo.com",
        password=PASSWORD,
        first_name="Ana",
        is_staff=True,
    )


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user, backend=BACKEND)
    return client


@pytest.fixture
def student(db) -> Student:
    user = User.objects.create_user(
        email="joao@example.com", password=PASSWORD, first_name="João"
    )
    return Student.objects.create(
        user=user,
        full_name="João da Silva",
        email="joao@example.com",
        unit="SP",
        development_start_date=datetime.date(2024, 1, 10),
    )


@pytest.fixture
def student_client(client, student):
    client.force_login(student.user, backend=BACKEND)
    return client


@pytest.fixture
def make_student(db):
    """Factory for extra students without a login user."""

    def _make(full_name, email=None, **fields):
        email = email or f"{full_name.split()[0].lower()}@example.com"
        return Student.objects.create(full_name=full_name, email=email, **fields)

    return _make
