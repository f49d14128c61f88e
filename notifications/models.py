# notifications/models.py
from django.db import models
from django.conf import settings


class Notification(models.Model):
    TYPE_JOIN_REQUEST = "join_request"
    TYPE_INVITE = "invite"
    TYPE_REQUEST_ACCEPTED = "request_accepted"
    TYPE_REQUEST_REJECTED = "request_rejected"
    TYPE_INVITE_ACCEPTED = "invite_accepted"
    TYPE_INVITE_DECLINED = "invite_declined"
    TYPE_SYSTEM = "system"

    TYPE_CHOICES = [
        (TYPE_JOIN_REQUEST, "Join Request"),
        (TYPE_INVITE, "Invite"),
        (TYPE_REQUEST_ACCEPTED, "Request Accepted"),
        (TYPE_REQUEST_REJECTED, "Request Rejected"),
        (TYPE_INVITE_ACCEPTED, "Invite Accepted"),
        (TYPE_INVITE_DECLINED, "Invite Declined"),
        (TYPE_SYSTEM, "System"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    type = models.CharField(max_length=64, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    body = models.TextField(blank=True)
    # Frontend path of the related team/project, e.g. /hack-team/12
    link = models.CharField(max_length=255, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notif_user_read_idx"),
            models.Index(fields=["type"], name="notif_type_idx"),
        ]

    def __str__(self):
        return f"{self.user} - {self.type} - {self.title}"
