from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import AttendanceRecord


@receiver(post_save, sender=AttendanceRecord)
def touch_last_activity(sender, instance, created, **kwargs):
    if not created:
        return
    student = instance.student
    if student.last_activity is None or instance.date > student.last_activity:
        student.last_activity = instance.date
        student.save(update_fields=["last_activity", "updated_at"])
