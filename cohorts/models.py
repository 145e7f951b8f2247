from django.core.validators import MinValueValidator
from django.db import models
from members.models import Student

class Cohort(models.Model):
    STATUS_CHOICES = [
        ("planejada", "Planejada"),
        ("em-andamento", "Em andamento"),
        ("encerrada", "Encerrada"),
    ]
    unit = models.CharField(max_length=8, default="SP")
    number = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    fee = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    start_date = models.DateField()
    hour = models.TimeField(null=True, blank=True)
    duration_months = models.PositiveIntegerField(default=6)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="planejada")
    students = models.ManyToManyField(Student, through="CohortMember", related_name="cohorts", blank=True)

    class Meta:
        ordering = ["unit", "number"]

    def __str__(self):
        return f"Turma {self.number} ({self.unit})"

    @property
    def revenue(self):
        active = self.students.filter(is_active=True).count()
        return active * self.fee

class CohortMember(models.Model):
    cohort = models.ForeignKey(Cohort, on_delete=models.CASCADE)
    student = models.ForeignKey(Student, on_delete=models.CASCADE)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["cohort", "student"], name="unique_cohort_member"),
        ]

class Lesson(models.Model):
    cohort = models.ForeignKey(Cohort, on_delete=models.CASCADE, related_name="lessons")
    date = models.DateField()
    content = models.TextField(blank=True)
    done = models.BooleanField(default=False)

    class Meta:
        ordering = ["date"]
