from django.db import models
from django.db.models import F, Q

from core.models import CollaborationRequest, CollaborationUnit, UnitMember


class HackTeam(CollaborationUnit):
    """
    A team forming for a specific hackathon.

    spots_left starts at size - 1 (the lead takes one seat) and drops by one
    per accepted request. Accepting is refused once it reaches 0.
    """
    MODE_ONLINE = "ONLINE"
    MODE_OFFLINE = "OFFLINE"
    MODE_HYBRID = "HYBRID"

    MODE_CHOICES = [
        (MODE_ONLINE, "Online"),
        (MODE_OFFLINE, "Offline"),
        (MODE_HYBRID, "Hybrid"),
    ]

    LABEL = "team"
    OWNER_TITLE = "team leader"
    NO_SLOT_MESSAGE = "No spots left in the team"
    COMPLETION_REWARD = 7
    ACCEPT_REWARD = 3
    OWNER_ROLE = "TEAM_LEAD"
    MEMBER_ROLE = "MEMBER"

    name = models.CharField(max_length=150)
    origin = models.CharField(max_length=255, help_text="city, country")
    team_desc = models.TextField(blank=True)
    image = models.URLField(max_length=1024, blank=True, null=True)
    size = models.PositiveIntegerField()
    spots_left = models.PositiveIntegerField()
    skill_stack = models.JSONField(default=list, blank=True)

    hack_name = models.CharField(max_length=255)
    hack_desc = models.TextField(blank=True)
    hack_begins = models.DateTimeField()
    hack_ends = models.DateTimeField()
    hack_link = models.URLField(max_length=500, blank=True)
    hack_location = models.CharField(max_length=255)
    hack_mode = models.CharField(max_length=10, choices=MODE_CHOICES)

    team_lead_phone = models.CharField(max_length=20, blank=True)
    team_lead_email = models.EmailField()

    class Meta(CollaborationUnit.Meta):
        indexes = [
            models.Index(fields=["status", "-created_at"], name="hackteam_status_recent_idx"),
        ]

    def __str__(self):
        return f"{self.name} @ {self.hack_name}"

    @property
    def display_name(self):
        return self.name

    @property
    def notify_email(self):
        return self.team_lead_email or self.owner.email

    @property
    def page_path(self):
        return f"/hack-team/{self.pk}"

    def has_open_slot(self):
        return self.spots_left > 0

    def on_member_added(self):
        HackTeam.objects.filter(pk=self.pk, spots_left__gt=0).update(spots_left=F("spots_left") - 1)


class HackTeamMember(UnitMember):
    ROLE_CHOICES = [
        (HackTeam.OWNER_ROLE, "Team Lead"),
        (HackTeam.MEMBER_ROLE, "Member"),
    ]

    team = models.ForeignKey(HackTeam, on_delete=models.CASCADE, related_name="members")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=HackTeam.MEMBER_ROLE)

    class Meta(UnitMember.Meta):
        constraints = [
            models.UniqueConstraint(fields=["team", "user"], name="unique_hackteam_member"),
        ]

    def __str__(self):
        return f"{self.user} in {self.team.name}"


class HackTeamRequest(CollaborationRequest):
    team = models.ForeignKey(HackTeam, on_delete=models.CASCADE, related_name="requests")

    class Meta(CollaborationRequest.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["sender", "receiver", "team", "type"],
                condition=Q(status="PENDING"),
                name="unique_pending_hackteam_request",
            ),
        ]
        indexes = [
            models.Index(fields=["team", "status"], name="hackteamreq_team_status_idx"),
        ]

    def __str__(self):
        return f"{self.type} {self.sender} -> {self.team.name} ({self.status})"

    @property
    def unit(self):
        return self.team
