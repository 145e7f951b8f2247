import logging

from django_rq import job

from mailer.rendering import render_email
from mailer.sending import send_email

logger = logging.getLogger(__name__)

BATCH_SIZE = 100


@job("mail")
def send_bulk_email(student_ids: list[int], subject: str, body: str):
    for i in range(0, len(student_ids), BATCH_SIZE):
        send_email_batch.delay(student_ids[i:i + BATCH_SIZE], subject, body)


@job("mail")
def send_email_batch(student_ids: list[int], subject: str, body: str):
    from members.models import Student

    students = Student.objects.filter(id__in=student_ids).exclude(email="")
    for student in students:
        subject_line, text, html = render_email(
            "custom", {"name": student.full_name, "body": body}, subject=subject
        )
        send_email(student.email, subject_line, html, text=text)
    logger.info("Sent bulk batch of %d emails", len(student_ids))
