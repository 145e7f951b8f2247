from django.db import models

# key -> (label, color)
EVENT_TYPES = {
    "desenvolvimento": ("Desenvolvimento", "#3B82F6"),
    "trabalho": ("Trabalho", "#8B5CF6"),
    "workshop": ("Workshop", "#10B981"),
    "palestra": ("Palestra", "#F59E0B"),
    "rito": ("Rito Aberto", "#DC2626"),
    "outro": ("Outro", "#6B7280"),
    "curso": ("Curso", "#EC4899"),
}
DEFAULT_EVENT_TYPE = "outro"

VISIBILITY_LEVELS = [
    ("alunos", "Alunos"),
    ("iniciados", "Iniciados"),
    ("mestres", "Mestres"),
    ("diretores", "Diretores"),
    ("fundadores", "Fundadores"),
    ("todos", "Todos"),
]

REPETITION_CHOICES = [
    ("none", "Não repetir"),
    ("daily", "Diariamente"),
    ("weekly", "Semanalmente"),
    ("biweekly", "Quinzenalmente"),
    ("monthly", "Mensalmente"),
    ("yearly", "Anualmente"),
]


class Event(models.Model):
    TYPE_CHOICES = [(key, label) for key, (label, _) in EVENT_TYPES.items()]

    title = models.CharField(max_length=200)
    date = models.DateField()
    time = models.TimeField(null=True, blank=True)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=200, default="Templo", blank=True)
    unit = models.CharField(max_length=8, default="SP")
    type = models.CharField(max_length=32, choices=TYPE_CHOICES, default=DEFAULT_EVENT_TYPE)
    color = models.CharField(max_length=7, default=EVENT_TYPES[DEFAULT_EVENT_TYPE][1])
    visibility = models.JSONField(default=list, blank=True)
    repetition = models.CharField(max_length=16, choices=REPETITION_CHOICES, default="none")
    repeat_until = models.DateField(null=True, blank=True)
    parent_event = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="occurrences",
    )
    guest_count = models.PositiveIntegerField(default=0)
    attendees = models.ManyToManyField(
        "members.Student",
        through="EventAttendee",
        related_name="events_attended",
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-time"]

    def __str__(self):
        return f"{self.title} ({self.date:%d/%m/%Y})"


class EventAttendee(models.Model):
    event = models.ForeignKey(Event, on_delete=models.CASCADE)
    student = models.ForeignKey("members.Student", on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "student"], name="unique_event_attendee"),
        ]
