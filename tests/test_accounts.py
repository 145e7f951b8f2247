"""Login users, temporary passwords and the auth-user API."""

import io

import pytest
from allauth.account.models import EmailAddress
from django.core.management import call_command
from django.urls import reverse

from accounts import services
from accounts.models import User
from members.models import Student

from .conftest import BACKEND, PASSWORD


@pytest.mark.django_db
def test_create_login_user_flags_temporary_password():
    """New login users must change their generated password."""
    # Act
    user, temp_password = services.create_login_user(" Maria@Example.com ", "Maria", "Souza")
    # Assert
    assert user.email == "maria@example.com"
    assert user.must_change_password
    assert user.temp_password_issued_at is not None
    assert user.check_password(temp_password)
    assert len(temp_password) == 10
    assert not user.is_staff


@pytest.mark.django_db
def test_create_login_user_reuses_existing_user(student):
    """An existing email gets a fresh temporary password instead of a duplicate."""
    # Act
    user, temp_password = services.create_login_user("JOAO@example.com")
    # Assert
    assert user.pk == student.user.pk
    assert User.objects.filter(email__iexact="joao@example.com").count() == 1
    assert user.check_password(temp_password)


def test_generated_passwords_avoid_ambiguous_characters():
    for _ in range(20):
        password = services.generate_temp_password()
        assert not set(password) & set("0O1lI")


@pytest.mark.django_db
def test_delete_auth_user(student):
    assert services.delete_auth_user("JOAO@example.com")
    assert not User.objects.filter(email="joao@example.com").exists()
    assert not services.delete_auth_user("joao@example.com")


def test_split_full_name():
    assert services.split_full_name("Maria da Silva") == ("Maria", "da Silva")
    assert services.split_full_name("Maria") == ("Maria", "")
    assert services.split_full_name("") == ("", "")


def test_wrong_password_is_rejected(client, student):
    """Login with a bad password stays on the form without a session."""
    # Act
    response = client.post(
        reverse("account_login"), {"login": student.email, "password": "errada123"}
    )
    # Assert
    assert response.status_code == 200
    assert response.context["form"].errors
    assert "_auth_user_id" not in client.session


def test_repeated_failures_lock_out_login(client, student, settings):
    """After five bad passwords even the right one is refused."""
    # Arrange
    settings.AXES_ENABLED = True
    # allauth's own limiter would answer before axes does
    settings.ACCOUNT_RATE_LIMITS = False
    url = reverse("account_login")
    for _ in range(settings.AXES_FAILURE_LIMIT):
        client.post(url, {"login": student.email, "password": "errada123"})
    # Act
    response = client.post(url, {"login": student.email, "password": PASSWORD})
    # Assert
    assert "account/lockout.html" in [t.name for t in response.templates]
    assert "_auth_user_id" not in client.session


def test_login_with_temporary_password_redirects_to_change(client, student):
    """Users holding a temporary password land on the change form."""
    # Arrange
    services.issue_temporary_password(student.user, "Provisoria#1")
    # Act
    response = client.post(
        reverse("account_login"), {"login": student.email, "password": "Provisoria#1"}
    )
    # Assert
    assert response.status_code == 302
    assert response.url == reverse("accounts:change_password")
    assert EmailAddress.objects.filter(
        user=student.user, email=student.email, verified=True, primary=True
    ).exists()


def test_temporary_password_blocks_other_pages(client, student):
    # Arrange
    services.issue_temporary_password(student.user, "Provisoria#1")
    client.force_login(student.user, backend=BACKEND)
    # Act
    blocked = client.get(reverse("members:profile"))
    allowed = client.get(reverse("accounts:change_password"))
    # Assert
    assert blocked.status_code == 302
    assert blocked.url == reverse("accounts:change_password")
    assert allowed.status_code == 200
    assert allowed.context["forced"]


def test_change_password_clears_flag(client, student):
    """A valid change stores the new password and lifts the restriction."""
    # Arrange
    user = student.user
    services.issue_temporary_password(user, "Provisoria#1")
    client.force_login(user, backend=BACKEND)
    # Act
    response = client.post(
        reverse("accounts:change_password"),
        {
            "current_password": "Provisoria#1",
            "new_password": "Lua-Cheia-2025!",
            "confirm_password": "Lua-Cheia-2025!",
        },
    )
    # Assert
    assert response.status_code == 302
    assert response.url == reverse("home")
    user.refresh_from_db()
    assert not user.must_change_password
    assert user.temp_password_issued_at is None
    assert user.check_password("Lua-Cheia-2025!")
    assert client.get(reverse("members:profile")).status_code == 200


@pytest.mark.parametrize(
    "data, field, message",
    [
        ({"current_password": "x"}, "__all__", "Todos os campos são obrigatórios"),
        (
            {"current_password": "errada", "new_password": "Lua-Cheia-2025!", "confirm_password": "Lua-Cheia-2025!"},
            "current_password",
            "Senha atual incorreta",
        ),
        (
            {"current_password": PASSWORD, "new_password": "Lua-Cheia-2025!", "confirm_password": "Lua-Nova-2025!"},
            "confirm_password",
            "A nova senha e a confirmação não coincidem",
        ),
        (
            {"current_password": PASSWORD, "new_password": PASSWORD, "confirm_password": PASSWORD},
            "new_password",
            "A nova senha deve ser diferente da senha atual",
        ),
    ],
)
def test_change_password_errors(student_client, data, field, message):
    response = student_client.post(reverse("accounts:change_password"), data)
    assert response.status_code == 200
    assert message in response.context["form"].errors[field]


def test_change_password_enforces_minimum_length(student_client):
    response = student_client.post(
        reverse("accounts:change_password"),
        {"current_password": PASSWORD, "new_password": "Ab#1", "confirm_password": "Ab#1"},
    )
    assert response.status_code == 200
    assert "new_password" in response.context["form"].errors


def test_admin_pages_require_staff(client, student_client):
    """Students get a 403 on admin pages and anonymous users go to login."""
    assert student_client.get(reverse("members:student_list")).status_code == 403
    client.logout()
    response = client.get(reverse("members:student_list"))
    assert response.status_code == 302
    assert reverse("account_login") in response.url


def test_student_pages_need_linked_student(admin_client):
    assert admin_client.get(reverse("members:profile")).status_code == 403


class TestDeleteAuthUserApi:
    url = "/api/delete-auth-user/"

    def test_deletes_user(self, admin_client, student):
        # Act
        response = admin_client.post(
            self.url, {"email": student.email}, content_type="application/json"
        )
        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Usuário excluído com sucesso da autenticação",
        }
        assert not User.objects.filter(email=student.email).exists()
        # the member record outlives its login
        assert Student.objects.filter(email=student.email, user__isnull=True).exists()

    def test_unknown_user(self, admin_client):
        response = admin_client.post(
            self.url, {"email": "ninguem@example.com"}, content_type="application/json"
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Usuário não encontrado na autenticação"

    def test_missing_email(self, admin_client):
        response = admin_client.post(self.url, {}, content_type="application/json")
        assert response.status_code == 400
        assert response.json() == {"error": "Email é obrigatório"}

    def test_invalid_json(self, admin_client):
        response = admin_client.post(self.url, "{nope", content_type="application/json")
        assert response.status_code == 400

    def test_get_not_allowed(self, admin_client):
        assert admin_client.get(self.url).status_code == 405

    def test_students_forbidden(self, student_client):
        response = student_client.post(
            self.url, {"email": "x@example.com"}, content_type="application/json"
        )
        assert response.status_code == 403


@pytest.mark.django_db
def test_sync_auth_users_creates_and_links(make_student):
    """Students without a login get one; matching emails are linked."""
    # Arrange
    orphan = make_student("Carla Dias", "carla@example.com")
    existing = User.objects.create_user(email="bruno@example.com", password=PASSWORD)
    unlinked = make_student("Bruno Reis", "BRUNO@example.com")
    out = io.StringIO()
    # Act
    call_command("sync_auth_users", stdout=out)
    # Assert
    orphan.refresh_from_db()
    unlinked.refresh_from_db()
    assert orphan.user is not None
    assert orphan.user.must_change_password
    assert unlinked.user_id == existing.pk
    assert "Created 1 users, linked 1 students" in out.getvalue()


@pytest.mark.django_db
def test_sync_auth_users_dry_run_writes_report(make_student, tmp_path):
    # Arrange
    student = make_student("Carla Dias", "carla@example.com")
    report = tmp_path / "report.csv"
    # Act
    call_command("sync_auth_users", "--dry-run", "--report", str(report), stdout=io.StringIO())
    # Assert
    student.refresh_from_db()
    assert student.user is None
    lines = report.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "email,action,temp_password"
    assert lines[1].startswith("carla@example.com,created")
