import logging
import secrets

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

logger = logging.getLogger(__name__)

# No 0/O, 1/l/I to keep passwords readable when copied from an email
TEMP_PASSWORD_ALPHABET = (
    "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789!@#$%"
)


def generate_temp_password(length=10):
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))


def issue_temporary_password(user, password=None):
    """Set a fresh temporary password on ``user`` and flag it for change."""
    password = password or generate_temp_password()
    user.set_password(password)
    user.must_change_password = True
    user.temp_password_issued_at = timezone.now()
    user.save(update_fields=["password", "must_change_password", "temp_password_issued_at"])
    return password


@transaction.atomic
def create_login_user(email, first_name="", last_name="", is_admin=False):
    """Create a login user holding a temporary password.

    Returns ``(user, temp_password)``. An existing user with the same email
    is reused and receives a new temporary password.
    """
    User = get_user_model()
    email = (email or "").strip().lower()
    if not email:
        raise ValueError("email is required")
    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        user = User.objects.create_user(
            email=email,
            password=None,
            first_name=first_name[:150],
            last_name=last_name[:150],
            is_staff=is_admin,
        )
        logger.info("Created login user %s", email)
    temp_password = issue_temporary_password(user)
    return user, temp_password


def complete_password_change(user, new_password):
    user.set_password(new_password)
    user.must_change_password = False
    user.temp_password_issued_at = None
    user.save(update_fields=["password", "must_change_password", "temp_password_issued_at"])
    logger.info("Password changed for user %s", user.pk)


def delete_auth_user(email):
    """Delete the login user for ``email``. Returns False when none exists."""
    User = get_user_model()
    email = (email or "").strip()
    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        logger.info("No login user found for %s", email)
        return False
    user.delete()
    logger.info("Deleted login user %s", email)
    return True


def split_full_name(full_name):
    parts = (full_name or "").strip().split(" ", 1)
    first = parts[0] if parts else ""
    last = parts[1] if len(parts) > 1 else ""
    return first, last
