import csv

from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import User
from accounts.services import create_login_user, split_full_name
from members.models import Student


class Command(BaseCommand):
    help = (
        "Create login users for students that have an email but no linked "
        "user. Existing users with a matching email are linked instead. "
        "No email is sent; temporary passwords go to the report."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would change without writing",
        )
        parser.add_argument(
            "--report",
            type=str,
            help="Write a CSV report (email, action, temp_password) to this path",
        )

    def handle(self, *args, **opts):
        dry_run = opts.get("dry_run")
        rows = []
        pending = (
            Student.objects.filter(user__isnull=True)
            .exclude(email="")
            .order_by("full_name")
        )
        for student in pending:
            existing = User.objects.filter(email__iexact=student.email).first()
            if existing:
                action, temp_password = "linked", ""
                if not dry_run:
                    student.user = existing
                    student.save(update_fields=["user"])
            else:
                action, temp_password = "created", ""
                if not dry_run:
                    with transaction.atomic():
                        first, last = split_full_name(student.full_name)
                        user, temp_password = create_login_user(student.email, first, last)
                        student.user = user
                        student.save(update_fields=["user"])
            rows.append((student.email, action, temp_password))
            self.stdout.write(f"{action:8} {student.email}")

        if opts.get("report"):
            with open(opts["report"], "w", newline="", encoding="utf-8") as fh:
                writer = csv.writer(fh)
                writer.writerow(["email", "action", "temp_password"])
                writer.writerows(rows)
            self.stdout.write(f"Report written to {opts['report']}")

        prefix = "[dry-run] " if dry_run else ""
        created = sum(1 for r in rows if r[1] == "created")
        linked = sum(1 for r in rows if r[1] == "linked")
        self.stdout.write(
            self.style.SUCCESS(f"{prefix}Created {created} users, linked {linked} students")
        )
