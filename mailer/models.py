from django.db import models

class EmailLog(models.Model):
    STATUS_SENT = "SENT"
    STATUS_SIMULATED = "SIMULATED"
    STATUS_CHOICES = [(STATUS_SENT, "SENT"), (STATUS_SIMULATED, "SIMULATED")]

    to = models.EmailField()
    subject = models.CharField(max_length=255)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES)
    provider_id = models.CharField(max_length=128, blank=True, null=True)
    error = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.status} {self.to}: {self.subject}"
