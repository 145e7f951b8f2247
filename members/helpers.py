import datetime
import re

from dateutil.relativedelta import relativedelta
from django.utils import timezone

FALLBACK_UNITS = [
    ("SP", "São Paulo"),
    ("BH", "Belo Horizonte"),
    ("CP", "Campinas"),
]

INACTIVITY_WINDOW = relativedelta(months=3)

STAGES = [
    ("master_magus_initiation_date", "master", "Mestre Mago"),
    ("not_entry_date", "not", "N.O.T."),
    ("magist_initiation_date", "initiated", "Iniciado"),
    ("internship_start_date", "internship", "Estagiando"),
    ("development_start_date", "development", "Desenvolvimento"),
]

DEVELOPMENT_TYPE = "development"
INTERNSHIP_BONUS_TYPES = ("work", "event")


def get_unit_choices():
    """Temple abbreviations with names, falling back to the founding units."""
    from .models import Temple

    temples = list(Temple.objects.filter(is_active=True).values_list("abbreviation", "name"))
    return temples or list(FALLBACK_UNITS)


def unit_label(abbreviation):
    return dict(get_unit_choices()).get(abbreviation, f"Templo {abbreviation}")


def parse_id(value):
    """Primary key from request data, or None when it is not a number."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _digits(value):
    return re.sub(r"\D", "", value or "")


def validate_cpf(cpf):
    cpf = _digits(cpf)
    if len(cpf) != 11 or cpf == cpf[0] * 11:
        return False
    for size in (9, 10):
        total = sum(int(cpf[i]) * (size + 1 - i) for i in range(size))
        digit = (total * 10) % 11
        if digit == 10:
            digit = 0
        if digit != int(cpf[size]):
            return False
    return True


def format_cpf(cpf):
    digits = _digits(cpf)
    if len(digits) != 11:
        return cpf
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def format_phone(phone):
    digits = _digits(phone)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return digits


def format_date(value):
    """ISO date (or ``date``) to dd/mm/yyyy."""
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.date.fromisoformat(value)
    return value.strftime("%d/%m/%Y")


def parse_date(value):
    """Parse dd/mm/yyyy or ISO yyyy-mm-dd into a ``date``.

    Raises ValueError on anything else.
    """
    value = (value or "").strip()
    if not value:
        raise ValueError("empty date")
    if "/" in value:
        day, month, year = value.split("/")
        return datetime.date(int(year), int(month), int(day))
    return datetime.date.fromisoformat(value[:10])


def status_stage(student):
    """Return ``(stage, label)`` for the furthest step the student reached."""
    for field, stage, label in STAGES:
        if getattr(student, field, None):
            return stage, label
    return "new", "Novo Membro"


def development_progress(student, records, today=None):
    if not student.development_start_date:
        return 0.0
    today = today or timezone.localdate()
    weeks = (today - student.development_start_date).days // 7
    if weeks <= 0:
        return 0.0
    attended = sum(1 for r in records if r.type == DEVELOPMENT_TYPE)
    return min(attended / weeks * 100, 100.0)


def internship_progress(student, records, today=None):
    start = student.internship_start_date
    if not start:
        return 0.0
    today = today or timezone.localdate()
    months = max((today.year - start.year) * 12 + (today.month - start.month), 0)
    # each work or event attendance adds two points
    bonus = sum(1 for r in records if r.type in INTERNSHIP_BONUS_TYPES)
    return min(months / 6 * 100 + bonus * 2, 100.0)


def is_recently_active(student, today=None):
    if not student.last_activity:
        return False
    today = today or timezone.localdate()
    return student.last_activity > today - INACTIVITY_WINDOW


def calculate_inactive_since(student, today=None):
    """Date from which an inactive student counts as inactive, or None."""
    if student.is_active or not student.last_activity:
        return None
    today = today or timezone.localdate()
    cutoff = today - INACTIVITY_WINDOW
    if student.last_activity <= cutoff:
        return cutoff
    return None


MILESTONES = [
    ("development_start_date", "Início do Desenvolvimento Mágicko"),
    ("internship_start_date", "Início do Estágio"),
    ("magist_initiation_date", "Iniciação como Magista"),
    ("not_entry_date", "Entrada na N.O.T."),
    ("master_magus_initiation_date", "Iniciação como Mestre Mago"),
]


def milestones(student):
    """Reached milestones as ``(date, title)`` in chronological order."""
    reached = [
        (getattr(student, field), title)
        for field, title in MILESTONES
        if getattr(student, field, None)
    ]
    return sorted(reached, key=lambda item: item[0])
