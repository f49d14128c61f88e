#  togethr-backend/core/models.py
from django.db import models
from django.conf import settings


class CollaborationUnit(models.Model):
    """
    Something people team up around: a hack team or a project.

    Lifecycle: created OPEN, closed exactly once by its owner
    (OPEN -> COMPLETED | CANCELLED). Closing is a status change, never a delete.
    Concrete units expose `members` and `requests` related managers.
    """
    STATUS_OPEN = "OPEN"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (STATUS_OPEN, "Open"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    # Overridden per unit type
    LABEL = "unit"
    OWNER_TITLE = "owner"
    NO_SLOT_MESSAGE = "No open slots left"
    COMPLETION_REWARD = 0
    ACCEPT_REWARD = 0
    OWNER_ROLE = "OWNER"
    MEMBER_ROLE = "MEMBER"

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="owned_%(class)ss",
    )
    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=STATUS_OPEN,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    @property
    def is_closed(self):
        return self.status != self.STATUS_OPEN

    @property
    def display_name(self):
        raise NotImplementedError

    @property
    def notify_email(self):
        """Address that receives join-request emails."""
        return self.owner.email

    @property
    def page_path(self):
        raise NotImplementedError

    def has_open_slot(self) -> bool:
        return True

    def on_member_added(self):
        """Hook for per-unit counters after a request is accepted."""


class UnitMember(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="%(class)s_set",
    )
    role = models.CharField(max_length=20)
    # Snapshot of the display name at join time
    name = models.CharField(max_length=150, blank=True)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["joined_at"]


class CollaborationRequest(models.Model):
    """
    A proposal for a user to join a unit.

    JOIN: sender asks to join, receiver is the unit owner.
    INVITE: owner (sender) invites a user (receiver).
    Only the receiver may accept/reject; only the sender may cancel.
    """
    TYPE_JOIN = "JOIN"
    TYPE_INVITE = "INVITE"

    TYPE_CHOICES = [
        (TYPE_JOIN, "Join"),
        (TYPE_INVITE, "Invite"),
    ]

    STATUS_PENDING = "PENDING"
    STATUS_ACCEPTED = "ACCEPTED"
    STATUS_REJECTED = "REJECTED"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default=TYPE_JOIN)
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_%(class)ss",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_%(class)ss",
    )
    message = models.TextField(blank=True)
    github_url = models.URLField(max_length=500, blank=True)
    linkedin_url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    @property
    def unit(self):
        raise NotImplementedError

    @property
    def joining_user(self):
        """The user who becomes a member if this request is accepted."""
        return self.sender if self.type == self.TYPE_JOIN else self.receiver


class ContactMessage(models.Model):
    name = models.CharField(max_length=150)
    email = models.EmailField()
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} <{self.email}>"


class Feedback(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="feedback",
    )
    # Snapshot of the author at submit time (anonymous feedback allowed)
    name = models.CharField(max_length=150, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    message = models.TextField()
    rating = models.PositiveSmallIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["rating"], name="feedback_rating_idx"),
        ]

    def __str__(self):
        return f"Feedback ({self.rating or '-'}) {self.created_at:%Y-%m-%d}"
