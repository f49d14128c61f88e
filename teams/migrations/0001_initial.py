import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


REQUEST_TYPES = [("JOIN", "Join"), ("INVITE", "Invite")]
REQUEST_STATUSES = [
    ("PENDING", "Pending"),
    ("ACCEPTED", "Accepted"),
    ("REJECTED", "Rejected"),
    ("CANCELLED", "Cancelled"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="HackTeam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[("OPEN", "Open"), ("COMPLETED", "Completed"), ("CANCELLED", "Cancelled")],
                        db_index=True,
                        default="OPEN",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=150)),
                ("origin", models.CharField(help_text="city, country", max_length=255)),
                ("team_desc", models.TextField(blank=True)),
                ("image", models.URLField(blank=True, max_length=1024, null=True)),
                ("size", models.PositiveIntegerField()),
                ("spots_left", models.PositiveIntegerField()),
                ("skill_stack", models.JSONField(blank=True, default=list)),
                ("hack_name", models.CharField(max_length=255)),
                ("hack_desc", models.TextField(blank=True)),
                ("hack_begins", models.DateTimeField()),
                ("hack_ends", models.DateTimeField()),
                ("hack_link", models.URLField(blank=True, max_length=500)),
                ("hack_location", models.CharField(max_length=255)),
                (
                    "hack_mode",
                    models.CharField(
                        choices=[("ONLINE", "Online"), ("OFFLINE", "Offline"), ("HYBRID", "Hybrid")],
                        max_length=10,
                    ),
                ),
                ("team_lead_phone", models.CharField(blank=True, max_length=20)),
                ("team_lead_email", models.EmailField(max_length=254)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="owned_hackteams",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["status", "-created_at"], name="hackteam_status_recent_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="HackTeamMember",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(blank=True, max_length=150)),
                ("joined_at", models.DateTimeField(auto_now_add=True)),
                (
                    "role",
                    models.CharField(
                        choices=[("TEAM_LEAD", "Team Lead"), ("MEMBER", "Member")],
                        default="MEMBER",
                        max_length=20,
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="members",
                        to="teams.hackteam",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="hackteammember_set",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["joined_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("team", "user"), name="unique_hackteam_member"),
                ],
            },
        ),
        migrations.CreateModel(
            name="HackTeamRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=REQUEST_TYPES, default="JOIN", max_length=10)),
                (
                    "status",
                    models.CharField(choices=REQUEST_STATUSES, db_index=True, default="PENDING", max_length=10),
                ),
                ("message", models.TextField(blank=True)),
                ("github_url", models.URLField(blank=True, max_length=500)),
                ("linkedin_url", models.URLField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "receiver",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_hackteamrequests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_hackteamrequests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="requests",
                        to="teams.hackteam",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["team", "status"], name="hackteamreq_team_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "PENDING")),
                        fields=("sender", "receiver", "team", "type"),
                        name="unique_pending_hackteam_request",
                    ),
                ],
            },
        ),
    ]
