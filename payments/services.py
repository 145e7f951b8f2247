from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.conf import settings
from django.utils import formats, timezone

from attendance.models import AttendanceRecord

from .pix import build_payload, qr_code_data_uri


@dataclass
class Payment:
    date: date
    amount: Decimal
    status: str = "paid"
    method: str = "PIX"


def monthly_fee():
    return Decimal(settings.MONTHLY_FEE)


def payment_history(student):
    """Monthly payments recorded as ``monthly`` attendance, newest first."""
    fee = monthly_fee()
    dates = (
        AttendanceRecord.objects.filter(student=student, type=AttendanceRecord.TYPE_MONTHLY)
        .order_by("-date")
        .values_list("date", flat=True)
    )
    return [Payment(date=d, amount=fee) for d in dates]


def is_month_paid(student, day=None):
    day = day or timezone.localdate()
    return AttendanceRecord.objects.filter(
        student=student,
        type=AttendanceRecord.TYPE_MONTHLY,
        date__year=day.year,
        date__month=day.month,
    ).exists()


def monthly_charge(day=None):
    """PIX payload and QR code for the monthly fee of ``day``'s month."""
    day = day or timezone.localdate()
    fee = monthly_fee()
    description = f"Mensalidade {formats.date_format(day, 'F/Y')}"
    payload = build_payload(
        key=settings.PIX_KEY,
        name=settings.PIX_MERCHANT_NAME,
        city=settings.PIX_MERCHANT_CITY,
        amount=fee,
        description=description,
    )
    return {
        "amount": fee,
        "description": description,
        "recipient": settings.PIX_MERCHANT_NAME,
        "code": payload,
        "qr_code": qr_code_data_uri(payload),
    }
