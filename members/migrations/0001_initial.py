import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Temple",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=128)),
                ("city", models.CharField(max_length=128)),
                ("abbreviation", models.CharField(max_length=8, unique=True)),
                ("address", models.CharField(blank=True, max_length=255)),
                ("founders", models.JSONField(blank=True, default=list)),
                ("is_active", models.BooleanField(default=True)),
                ("photo", models.ImageField(blank=True, upload_to="temples/")),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("photo", models.ImageField(blank=True, upload_to="photos/")),
                ("full_name", models.CharField(max_length=200)),
                ("birth_date", models.DateField(blank=True, null=True)),
                ("cpf", models.CharField(blank=True, max_length=14)),
                ("rg", models.CharField(blank=True, max_length=20)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("phone", models.CharField(blank=True, max_length=20)),
                ("religion", models.CharField(blank=True, max_length=64)),
                ("unit", models.CharField(default="SP", max_length=8)),
                ("turma", models.CharField(blank=True, max_length=64)),
                ("development_start_date", models.DateField(blank=True, null=True)),
                ("internship_start_date", models.DateField(blank=True, null=True)),
                ("magist_initiation_date", models.DateField(blank=True, null=True)),
                ("not_entry_date", models.DateField(blank=True, null=True)),
                ("master_magus_initiation_date", models.DateField(blank=True, null=True)),
                ("is_founder", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("is_guest", models.BooleanField(default=False)),
                ("activity_status", models.CharField(choices=[("active", "Ativo"), ("inactive", "Inativo"), ("pending", "Pendente")], default="active", max_length=16)),
                ("inactive_since", models.DateField(blank=True, null=True)),
                ("last_activity", models.DateField(blank=True, null=True)),
                ("street", models.CharField(blank=True, max_length=200)),
                ("number", models.CharField(blank=True, max_length=20)),
                ("complement", models.CharField(blank=True, max_length=100)),
                ("neighborhood", models.CharField(blank=True, max_length=100)),
                ("zip_code", models.CharField(blank=True, max_length=10)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("state", models.CharField(blank=True, max_length=2)),
                ("is_pending_approval", models.BooleanField(default=False)),
                ("invite_status", models.CharField(blank=True, choices=[("pending", "Pendente"), ("accepted", "Aceito"), ("expired", "Expirado")], max_length=16)),
                ("invite_token", models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ("invited_at", models.DateTimeField(blank=True, null=True)),
                ("invited_by", models.CharField(blank=True, max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="student", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ["full_name"]},
        ),
    ]
