from django.conf import settings
from django.db import models


class Temple(models.Model):
    name = models.CharField(max_length=128)
    city = models.CharField(max_length=128)
    abbreviation = models.CharField(max_length=8, unique=True)
    address = models.CharField(max_length=255, blank=True)
    founders = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    photo = models.ImageField(upload_to="temples/", blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.abbreviation})"


class Student(models.Model):
    ACTIVITY_ACTIVE = "active"
    ACTIVITY_INACTIVE = "inactive"
    ACTIVITY_PENDING = "pending"
    ACTIVITY_CHOICES = [
        (ACTIVITY_ACTIVE, "Ativo"),
        (ACTIVITY_INACTIVE, "Inativo"),
        (ACTIVITY_PENDING, "Pendente"),
    ]
    INVITE_PENDING = "pending"
    INVITE_ACCEPTED = "accepted"
    INVITE_EXPIRED = "expired"
    INVITE_CHOICES = [
        (INVITE_PENDING, "Pendente"),
        (INVITE_ACCEPTED, "Aceito"),
        (INVITE_EXPIRED, "Expirado"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="student",
    )
    photo = models.ImageField(upload_to="photos/", blank=True)
    full_name = models.CharField(max_length=200)
    birth_date = models.DateField(null=True, blank=True)
    cpf = models.CharField(max_length=14, blank=True)
    rg = models.CharField(max_length=20, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True)
    religion = models.CharField(max_length=64, blank=True)
    unit = models.CharField(max_length=8, default="SP")
    turma = models.CharField(max_length=64, blank=True)

    development_start_date = models.DateField(null=True, blank=True)
    internship_start_date = models.DateField(null=True, blank=True)
    magist_initiation_date = models.DateField(null=True, blank=True)
    not_entry_date = models.DateField(null=True, blank=True)
    master_magus_initiation_date = models.DateField(null=True, blank=True)

    is_founder = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    is_guest = models.BooleanField(default=False)
    activity_status = models.CharField(
        max_length=16, choices=ACTIVITY_CHOICES, default=ACTIVITY_ACTIVE
    )
    inactive_since = models.DateField(null=True, blank=True)
    last_activity = models.DateField(null=True, blank=True)

    street = models.CharField(max_length=200, blank=True)
    number = models.CharField(max_length=20, blank=True)
    complement = models.CharField(max_length=100, blank=True)
    neighborhood = models.CharField(max_length=100, blank=True)
    zip_code = models.CharField(max_length=10, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=2, blank=True)

    is_pending_approval = models.BooleanField(default=False)
    invite_status = models.CharField(max_length=16, choices=INVITE_CHOICES, blank=True)
    invite_token = models.CharField(max_length=64, unique=True, null=True, blank=True)
    invited_at = models.DateTimeField(null=True, blank=True)
    invited_by = models.CharField(max_length=200, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["full_name"]

    def __str__(self):
        return self.full_name

    @property
    def is_admin(self):
        return bool(self.user_id and self.user.is_staff)

    @property
    def photo_url(self):
        return self.photo.url if self.photo else ""
