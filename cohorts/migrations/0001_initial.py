import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("members", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Cohort",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("unit", models.CharField(default="SP", max_length=8)),
                ("number", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("fee", models.DecimalField(decimal_places=2, default=0, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ("start_date", models.DateField()),
                ("hour", models.TimeField(blank=True, null=True)),
                ("duration_months", models.PositiveIntegerField(default=6)),
                ("status", models.CharField(choices=[("planejada", "Planejada"), ("em-andamento", "Em andamento"), ("encerrada", "Encerrada")], default="planejada", max_length=16)),
            ],
            options={"ordering": ["unit", "number"]},
        ),
        migrations.CreateModel(
            name="CohortMember",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("joined_at", models.DateTimeField(auto_now_add=True)),
                ("cohort", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="cohorts.cohort")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="members.student")),
            ],
        ),
        migrations.AddField(
            model_name="cohort",
            name="students",
            field=models.ManyToManyField(blank=True, related_name="cohorts", through="cohorts.CohortMember", to="members.student"),
        ),
        migrations.CreateModel(
            name="Lesson",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("content", models.TextField(blank=True)),
                ("done", models.BooleanField(default=False)),
                ("cohort", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lessons", to="cohorts.cohort")),
            ],
            options={"ordering": ["date"]},
        ),
        migrations.AddConstraint(
            model_name="cohortmember",
            constraint=models.UniqueConstraint(fields=("cohort", "student"), name="unique_cohort_member"),
        ),
    ]
