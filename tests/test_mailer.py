"""Email delivery, the simulated fallback and the send-email API."""

import pytest
from django.core import mail
from django.urls import reverse
from rest_framework.test import APIClient

from jobs import tasks
from mailer import api, sending
from mailer.models import EmailLog
from mailer.rendering import render_email


@pytest.mark.django_db
def test_send_email_delivers():
    log = sending.send_email("ana@example.com", "Olá", "<p>Bem-vinda</p>")
    assert log.status == EmailLog.STATUS_SENT
    assert mail.outbox[0].to == ["ana@example.com"]
    assert mail.outbox[0].body == "Bem-vinda"
    assert mail.outbox[0].alternatives[0][0] == "<p>Bem-vinda</p>"


@pytest.mark.django_db
def test_send_email_falls_back_to_simulation(monkeypatch):
    """A delivery failure is logged and recorded, never raised."""
    # Arrange
    def broken(*args, **kwargs):
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr(sending, "deliver_email", broken)
    # Act
    log = sending.send_email("ana@example.com", "Olá", "<p>Oi</p>")
    # Assert
    assert log.status == EmailLog.STATUS_SIMULATED
    assert log.error == "smtp down"
    assert not mail.outbox


@pytest.mark.django_db
def test_simulate_setting_skips_delivery(settings):
    settings.EMAIL_SIMULATE = True
    log = sending.send_email("ana@example.com", "Olá", "<p>Oi</p>")
    assert log.status == EmailLog.STATUS_SIMULATED
    assert not mail.outbox


def test_render_email_uses_default_subject():
    subject, text, html = render_email("custom", {"name": "Ana", "body": "Linha 1\nLinha 2"})
    assert subject == "Nosso Templo"
    assert "Olá Ana" in text
    assert "<br>" in html
    subject, _, _ = render_email("custom", {"name": "Ana", "body": "x"}, subject="Aviso")
    assert subject == "Aviso"


class TestSendEmailApi:
    url = "/api/send-email/"
    payload = {"to": "ana@example.com", "subject": "Aviso", "html": "<p>Reunião amanhã</p>"}

    @pytest.fixture
    def api_client(self, admin_user):
        client = APIClient()
        client.force_authenticate(user=admin_user)
        return client

    def test_sends(self, api_client):
        response = api_client.post(self.url, self.payload, format="json")
        assert response.status_code == 200
        assert response.json()["message"] == "Email enviado com sucesso"
        assert "messageId" in response.json()
        assert mail.outbox[0].subject == "Aviso"
        assert EmailLog.objects.get().status == EmailLog.STATUS_SENT

    def test_incomplete(self, api_client):
        response = api_client.post(self.url, {"to": "ana@example.com"}, format="json")
        assert response.status_code == 400
        assert response.json() == {"message": "Dados incompletos"}

    def test_delivery_error(self, api_client, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("quota exceeded")

        monkeypatch.setattr(api, "deliver_email", broken)
        response = api_client.post(self.url, self.payload, format="json")
        assert response.status_code == 500
        assert response.json() == {"message": "Erro ao enviar email", "error": "quota exceeded"}

    def test_method_not_allowed(self, api_client):
        assert api_client.get(self.url).status_code == 405

    def test_anonymous(self, db):
        response = APIClient().post(self.url, self.payload, format="json")
        assert response.status_code == 403


def test_bulk_email_view_queues_job(admin_client, student, make_student, monkeypatch):
    """Only active members of the chosen unit are queued."""
    # Arrange
    queued = []
    monkeypatch.setattr(tasks.send_bulk_email, "delay", lambda *args: queued.append(args))
    make_student("Bruno Reis", unit="BH")
    make_student("Carla Dias", is_active=False)
    # Act
    response = admin_client.post(
        reverse("mailer:bulk_email"), {"unit": "SP", "subject": "Aviso", "body": "Olá"}
    )
    # Assert
    assert response.status_code == 302
    assert queued == [([student.id], "Aviso", "Olá")]


def test_bulk_email_without_recipients(admin_client, monkeypatch):
    monkeypatch.setattr(tasks.send_bulk_email, "delay", lambda *args: pytest.fail("queued"))
    response = admin_client.post(
        reverse("mailer:bulk_email"), {"unit": "", "subject": "Aviso", "body": "Olá"}
    )
    assert response.status_code == 200


def test_bulk_email_splits_batches(monkeypatch):
    batches = []
    monkeypatch.setattr(tasks.send_email_batch, "delay", lambda ids, s, b: batches.append(len(ids)))
    tasks.send_bulk_email(list(range(250)), "Aviso", "Olá")
    assert batches == [100, 100, 50]


@pytest.mark.django_db
def test_email_batch_sends_personalised_messages(student, make_student):
    other = make_student("Carla Dias")
    tasks.send_email_batch([student.id, other.id], "Aviso", "Reunião amanhã")
    assert sorted(m.to[0] for m in mail.outbox) == ["carla@example.com", "joao@example.com"]
    assert all(m.subject == "Aviso" for m in mail.outbox)
    assert any("Olá Carla Dias" in m.body for m in mail.outbox)
