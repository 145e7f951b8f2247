"""Invitation workflow: send, accept, approve, reject and resend."""
import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.urls import reverse
from django.utils import timezone

from accounts.services import (
    create_login_user,
    delete_auth_user,
    issue_temporary_password,
    split_full_name,
)
from mailer.rendering import render_email
from mailer.sending import send_email

from .models import Student

logger = logging.getLogger(__name__)

REGISTRATION_FIELDS = (
    "full_name",
    "birth_date",
    "cpf",
    "rg",
    "phone",
    "religion",
    "street",
    "number",
    "complement",
    "neighborhood",
    "zip_code",
    "city",
    "state",
)


class InviteError(Exception):
    pass


def generate_invite_token():
    return secrets.token_urlsafe(32)[:64]


def invite_url(token):
    base = settings.SITE_URL.rstrip("/")
    return f"{base}{reverse('members:invite_accept', args=[token])}"


def _send_invite_email(student, temp_password):
    subject, text, html = render_email(
        "invite",
        {
            "name": student.full_name,
            "email": student.email,
            "invite_url": invite_url(student.invite_token),
            "temp_password": temp_password,
            "ttl_days": settings.INVITE_TTL_DAYS,
        },
    )
    return send_email(student.email, subject, html, text=text)


def send_invite(full_name, email, unit, turma="", invited_by=""):
    """Create an invited student with a login user and email the invite.

    Returns ``(student, temp_password)``.
    """
    email = (email or "").strip().lower()
    if not full_name or not email:
        raise InviteError("Nome e email são obrigatórios")
    if Student.objects.filter(email__iexact=email).exists():
        raise InviteError("Já existe um aluno com este email.")
    with transaction.atomic():
        first, last = split_full_name(full_name)
        user, temp_password = create_login_user(email, first, last)
        student = Student.objects.create(
            user=user,
            full_name=full_name.strip(),
            email=email,
            unit=unit,
            turma=turma,
            is_active=False,
            activity_status=Student.ACTIVITY_PENDING,
            invite_status=Student.INVITE_PENDING,
            invite_token=generate_invite_token(),
            invited_at=timezone.now(),
            invited_by=invited_by,
            is_pending_approval=False,
        )
    _send_invite_email(student, temp_password)
    logger.info("Invite sent to %s by %s", email, invited_by or "unknown")
    return student, temp_password


def get_valid_invite(token):
    """Student for a usable invite token, or None.

    Pending invites older than ``INVITE_TTL_DAYS`` are marked expired.
    """
    if not token:
        return None
    student = Student.objects.filter(invite_token=token).first()
    if student is None or student.invite_status != Student.INVITE_PENDING:
        return None
    ttl = timedelta(days=settings.INVITE_TTL_DAYS)
    if not student.invited_at or timezone.now() - student.invited_at > ttl:
        student.invite_status = Student.INVITE_EXPIRED
        student.save(update_fields=["invite_status", "updated_at"])
        logger.info("Invite for %s expired", student.email)
        return None
    return student


def accept_invite(token, registration_data):
    student = get_valid_invite(token)
    if student is None:
        raise InviteError("Convite inválido ou expirado")
    for name in REGISTRATION_FIELDS:
        if name in registration_data:
            setattr(student, name, registration_data[name])
    student.invite_status = Student.INVITE_ACCEPTED
    student.is_pending_approval = True
    student.save()
    logger.info("Invite accepted by %s", student.email)
    return student


def approve_student(student):
    student.is_active = True
    student.is_pending_approval = False
    student.activity_status = Student.ACTIVITY_ACTIVE
    student.invite_status = Student.INVITE_ACCEPTED
    student.save(
        update_fields=[
            "is_active",
            "is_pending_approval",
            "activity_status",
            "invite_status",
            "updated_at",
        ]
    )
    subject, text, html = render_email("approval", {"name": student.full_name})
    send_email(student.email, subject, html, text=text)
    logger.info("Student %s approved", student.email)
    return student


def reject_student(student, reason):
    """Email the rejection, then remove the student and its login user."""
    subject, text, html = render_email(
        "rejection", {"name": student.full_name, "reason": reason}
    )
    send_email(student.email, subject, html, text=text)
    email = student.email
    student.delete()
    delete_auth_user(email)
    logger.info("Student %s rejected", email)


def resend_invite(student):
    """New token and temporary password for a pending or expired invite."""
    if student.invite_status == Student.INVITE_ACCEPTED:
        raise InviteError("Este convite já foi aceito")
    with transaction.atomic():
        if student.user is None:
            first, last = split_full_name(student.full_name)
            user, temp_password = create_login_user(student.email, first, last)
            student.user = user
        else:
            temp_password = issue_temporary_password(student.user)
        student.invite_token = generate_invite_token()
        student.invite_status = Student.INVITE_PENDING
        student.invited_at = timezone.now()
        student.save()
    _send_invite_email(student, temp_password)
    logger.info("Invite resent to %s", student.email)
    return student, temp_password
