import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("members", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("date", models.DateField()),
                ("time", models.TimeField(blank=True, null=True)),
                ("description", models.TextField(blank=True)),
                ("location", models.CharField(blank=True, default="Templo", max_length=200)),
                ("unit", models.CharField(default="SP", max_length=8)),
                ("type", models.CharField(choices=[("desenvolvimento", "Desenvolvimento"), ("trabalho", "Trabalho"), ("workshop", "Workshop"), ("palestra", "Palestra"), ("rito", "Rito Aberto"), ("outro", "Outro"), ("curso", "Curso")], default="outro", max_length=32)),
                ("color", models.CharField(default="#6B7280", max_length=7)),
                ("visibility", models.JSONField(blank=True, default=list)),
                ("repetition", models.CharField(choices=[("none", "Não repetir"), ("daily", "Diariamente"), ("weekly", "Semanalmente"), ("biweekly", "Quinzenalmente"), ("monthly", "Mensalmente"), ("yearly", "Anualmente")], default="none", max_length=16)),
                ("repeat_until", models.DateField(blank=True, null=True)),
                ("guest_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("parent_event", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="occurrences", to="events.event")),
            ],
            options={"ordering": ["-date", "-time"]},
        ),
        migrations.CreateModel(
            name="EventAttendee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("event", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="events.event")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="members.student")),
            ],
        ),
        migrations.AddField(
            model_name="event",
            name="attendees",
            field=models.ManyToManyField(blank=True, related_name="events_attended", through="events.EventAttendee", to="members.student"),
        ),
        migrations.AddConstraint(
            model_name="eventattendee",
            constraint=models.UniqueConstraint(fields=("event", "student"), name="unique_event_attendee"),
        ),
    ]
