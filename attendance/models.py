from django.db import models
from django.db.models import Q

class AttendanceRecord(models.Model):
    TYPE_DEVELOPMENT = "development"
    TYPE_WORK = "work"
    TYPE_MONTHLY = "monthly"
    TYPE_EVENT = "event"
    TYPE_CHOICES = [
        (TYPE_DEVELOPMENT, "Desenvolvimento"),
        (TYPE_WORK, "Trabalho"),
        (TYPE_MONTHLY, "Mensalidade"),
        (TYPE_EVENT, "Evento"),
    ]
    student = models.ForeignKey(
        "members.Student", on_delete=models.CASCADE, related_name="attendance_records"
    )
    date = models.DateField()
    type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    event = models.ForeignKey(
        "events.Event",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="attendance_records",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date"]
        constraints = [
            models.UniqueConstraint(
                fields=["student", "date", "type", "event"],
                name="unique_attendance_with_event",
            ),
            models.UniqueConstraint(
                fields=["student", "date", "type"],
                condition=Q(event__isnull=True),
                name="unique_attendance_without_event",
            ),
        ]

    def __str__(self):
        return f"{self.student_id} {self.date} {self.type}"
