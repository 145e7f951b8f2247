from django.core.management.base import BaseCommand
from django.utils import timezone

from members.helpers import INACTIVITY_WINDOW
from members.models import Student


class Command(BaseCommand):
    help = (
        "Mark students whose last activity is older than three months as "
        "inactive and record since when."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only list the students that would change",
        )

    def handle(self, *args, **opts):
        today = timezone.localdate()
        cutoff = today - INACTIVITY_WINDOW
        stale = Student.objects.filter(
            is_active=True,
            is_guest=False,
            last_activity__isnull=False,
            last_activity__lte=cutoff,
        )
        count = 0
        for student in stale:
            count += 1
            self.stdout.write(f"inactive {student.email} (last activity {student.last_activity})")
            if opts.get("dry_run"):
                continue
            student.is_active = False
            student.activity_status = Student.ACTIVITY_INACTIVE
            student.inactive_since = cutoff
            student.save(update_fields=["is_active", "activity_status", "inactive_since", "updated_at"])
        prefix = "[dry-run] " if opts.get("dry_run") else ""
        self.stdout.write(self.style.SUCCESS(f"{prefix}{count} students marked inactive"))
