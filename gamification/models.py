from django.db import models
from django.conf import settings


class TrustLog(models.Model):
    """
    Immutable audit trail of trust points earned.
    Linked to the unit that triggered it for traceability ("Why did I get points?").
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="trust_logs",
    )

    amount = models.PositiveIntegerField()
    reason = models.CharField(max_length=64, help_text="e.g. team.completed")

    # Traceability (generic across hack teams and projects)
    unit_label = models.CharField(max_length=32, help_text="e.g. team, project")
    unit_id = models.PositiveBigIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="trustlog_user_recent_idx"),
            models.Index(fields=["unit_label", "unit_id"], name="trustlog_unit_idx"),
        ]

    def __str__(self):
        return f"{self.user} (+{self.amount}): {self.reason} {self.unit_label}#{self.unit_id}"
