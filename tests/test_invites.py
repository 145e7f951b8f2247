"""Invitation workflow from sending to approval."""

import datetime

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone

from accounts.models import User
from mailer.models import EmailLog
from members import invites
from members.models import Student


@pytest.fixture
def invited(db):
    student, temp_password = invites.send_invite(
        "Maria Souza", "Maria@Example.com", "SP", turma="Turma 3", invited_by="admin@nossotemplo.com"
    )
    return student


def test_send_invite_creates_pending_student(invited):
    """The invitee gets a login, a token and an email with both."""
    # Assert
    assert invited.email == "maria@example.com"
    assert invited.invite_status == Student.INVITE_PENDING
    assert not invited.is_active
    assert invited.activity_status == Student.ACTIVITY_PENDING
    assert len(invited.invite_token) <= 64
    assert invited.user.must_change_password
    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.to == ["maria@example.com"]
    assert message.subject == "Convite - Nosso Templo"
    assert invites.invite_url(invited.invite_token) in message.body
    assert EmailLog.objects.get().status == EmailLog.STATUS_SENT


def test_send_invite_rejects_duplicate(invited):
    with pytest.raises(invites.InviteError, match="Já existe um aluno com este email."):
        invites.send_invite("Outra Maria", "maria@example.com", "SP")


def test_expired_invite_is_marked(invited):
    # Arrange
    invited.invited_at = timezone.now() - datetime.timedelta(days=8)
    invited.save()
    # Act
    found = invites.get_valid_invite(invited.invite_token)
    # Assert
    assert found is None
    invited.refresh_from_db()
    assert invited.invite_status == Student.INVITE_EXPIRED


def test_unknown_token():
    assert invites.get_valid_invite("") is None


@pytest.mark.django_db
def test_unknown_token_in_db():
    assert invites.get_valid_invite("nao-existe") is None


def test_accept_invite_page(client, invited):
    """Filling the registration form leaves the student awaiting approval."""
    # Arrange
    url = reverse("members:invite_accept", args=[invited.invite_token])
    # Act
    page = client.get(url)
    response = client.post(
        url,
        {"full_name": "Maria Souza", "birth_date": "1990-03-15", "phone": "11987654321"},
    )
    # Assert
    assert page.status_code == 200
    assert response.status_code == 200
    invited.refresh_from_db()
    assert invited.invite_status == Student.INVITE_ACCEPTED
    assert invited.is_pending_approval
    assert invited.birth_date == datetime.date(1990, 3, 15)
    # a used token cannot be reused
    assert client.get(url).status_code == 404


def test_accept_invite_requires_fields(client, invited):
    url = reverse("members:invite_accept", args=[invited.invite_token])
    response = client.post(url, {"full_name": "Maria Souza"})
    assert response.status_code == 200
    assert "phone" in response.context["form"].errors
    invited.refresh_from_db()
    assert invited.invite_status == Student.INVITE_PENDING


def test_approve(admin_client, invited):
    # Arrange
    invites.accept_invite(invited.invite_token, {"phone": "11987654321"})
    mail.outbox.clear()
    # Act
    response = admin_client.post(reverse("members:invite_approve", args=[invited.id]))
    # Assert
    assert response.status_code == 302
    invited.refresh_from_db()
    assert invited.is_active
    assert not invited.is_pending_approval
    assert invited.activity_status == Student.ACTIVITY_ACTIVE
    assert mail.outbox[0].subject == "Cadastro aprovado - Nosso Templo"


def test_reject_removes_student_and_login(admin_client, invited):
    """Rejection emails the reason, then deletes the record and its login."""
    # Arrange
    invites.accept_invite(invited.invite_token, {})
    mail.outbox.clear()
    # Act
    response = admin_client.post(
        reverse("members:invite_reject", args=[invited.id]), {"reason": "Dados incompletos"}
    )
    # Assert
    assert response.status_code == 302
    assert not Student.objects.filter(email="maria@example.com").exists()
    assert not User.objects.filter(email="maria@example.com").exists()
    assert "Dados incompletos" in mail.outbox[0].body


def test_resend_issues_new_token(invited):
    # Arrange
    old_token = invited.invite_token
    invited.invite_status = Student.INVITE_EXPIRED
    invited.save()
    # Act
    student, temp_password = invites.resend_invite(invited)
    # Assert
    assert student.invite_token != old_token
    assert student.invite_status == Student.INVITE_PENDING
    assert student.user.check_password(temp_password)
    assert len(mail.outbox) == 2


def test_resend_refuses_accepted(invited):
    invites.accept_invite(invited.invite_token, {})
    invited.refresh_from_db()
    with pytest.raises(invites.InviteError):
        invites.resend_invite(invited)


def test_invite_list_sends(admin_client):
    response = admin_client.post(
        reverse("members:invite_list"),
        {"full_name": "Bruno Reis", "email": "bruno@example.com", "unit": "BH"},
    )
    assert response.status_code == 302
    bruno = Student.objects.get(email="bruno@example.com")
    assert bruno.unit == "BH"
    assert bruno.invited_by == "admin@nossotemplo.com"
