from django.db import models
from django.db.models import F, Q

from core.models import CollaborationRequest, CollaborationUnit, UnitMember


class Project(CollaborationUnit):
    """
    A longer-running side project looking for contributors.

    Accepts contributors while is_open; current_members counts the owner.
    """
    STAGE_IDEA = "IDEA"
    STAGE_BUILDING = "BUILDING"
    STAGE_MVP = "MVP"
    STAGE_LIVE = "LIVE"

    STAGE_CHOICES = [
        (STAGE_IDEA, "Idea"),
        (STAGE_BUILDING, "Building"),
        (STAGE_MVP, "MVP"),
        (STAGE_LIVE, "Live"),
    ]

    COMMITMENT_LOW = "LOW"
    COMMITMENT_MEDIUM = "MEDIUM"
    COMMITMENT_HIGH = "HIGH"

    COMMITMENT_CHOICES = [
        (COMMITMENT_LOW, "Low"),
        (COMMITMENT_MEDIUM, "Medium"),
        (COMMITMENT_HIGH, "High"),
    ]

    LABEL = "project"
    OWNER_TITLE = "project owner"
    NO_SLOT_MESSAGE = "This project is not accepting contributors"
    COMPLETION_REWARD = 10
    ACCEPT_REWARD = 4
    OWNER_ROLE = "OWNER"
    MEMBER_ROLE = "CONTRIBUTOR"

    title = models.CharField(max_length=255)
    short_desc = models.CharField(max_length=300)
    detailed_desc = models.TextField()
    extra_note = models.TextField(blank=True)
    stage = models.CharField(max_length=10, choices=STAGE_CHOICES)
    skill_stack = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)
    commitment = models.CharField(max_length=10, choices=COMMITMENT_CHOICES)
    github_url = models.URLField(max_length=500, blank=True)

    contact_phone = models.CharField(max_length=20, blank=True)
    contact_email = models.EmailField()
    owner_linkedin_url = models.URLField(max_length=500)

    is_open = models.BooleanField(default=True, help_text="Accepting contributors")
    current_members = models.PositiveIntegerField(default=1)

    class Meta(CollaborationUnit.Meta):
        indexes = [
            models.Index(fields=["status", "-created_at"], name="project_status_recent_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def display_name(self):
        return self.title

    @property
    def notify_email(self):
        return self.contact_email or self.owner.email

    @property
    def page_path(self):
        return f"/projects/{self.pk}"

    def has_open_slot(self):
        return self.is_open

    def on_member_added(self):
        Project.objects.filter(pk=self.pk).update(current_members=F("current_members") + 1)


class ProjectMember(UnitMember):
    ROLE_CHOICES = [
        (Project.OWNER_ROLE, "Owner"),
        (Project.MEMBER_ROLE, "Contributor"),
    ]

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="members")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=Project.MEMBER_ROLE)

    class Meta(UnitMember.Meta):
        constraints = [
            models.UniqueConstraint(fields=["project", "user"], name="unique_project_member"),
        ]

    def __str__(self):
        return f"{self.user} on {self.project.title}"


class ProjectRequest(CollaborationRequest):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="requests")

    class Meta(CollaborationRequest.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["sender", "receiver", "project", "type"],
                condition=Q(status="PENDING"),
                name="unique_pending_project_request",
            ),
        ]
        indexes = [
            models.Index(fields=["project", "status"], name="projectreq_proj_status_idx"),
        ]

    def __str__(self):
        return f"{self.type} {self.sender} -> {self.project.title} ({self.status})"

    @property
    def unit(self):
        return self.project
