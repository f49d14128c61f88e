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
            name="Project",
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
                ("title", models.CharField(max_length=255)),
                ("short_desc", models.CharField(max_length=300)),
                ("detailed_desc", models.TextField()),
                ("extra_note", models.TextField(blank=True)),
                (
                    "stage",
                    models.CharField(
                        choices=[("IDEA", "Idea"), ("BUILDING", "Building"), ("MVP", "MVP"), ("LIVE", "Live")],
                        max_length=10,
                    ),
                ),
                ("skill_stack", models.JSONField(blank=True, default=list)),
                ("tags", models.JSONField(blank=True, default=list)),
                (
                    "commitment",
                    models.CharField(
                        choices=[("LOW", "Low"), ("MEDIUM", "Medium"), ("HIGH", "High")],
                        max_length=10,
                    ),
                ),
                ("github_url", models.URLField(blank=True, max_length=500)),
                ("contact_phone", models.CharField(blank=True, max_length=20)),
                ("contact_email", models.EmailField(max_length=254)),
                ("owner_linkedin_url", models.URLField(max_length=500)),
                ("is_open", models.BooleanField(default=True, help_text="Accepting contributors")),
                ("current_members", models.PositiveIntegerField(default=1)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="owned_projects",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["status", "-created_at"], name="project_status_recent_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProjectMember",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(blank=True, max_length=150)),
                ("joined_at", models.DateTimeField(auto_now_add=True)),
                (
                    "role",
                    models.CharField(
                        choices=[("OWNER", "Owner"), ("CONTRIBUTOR", "Contributor")],
                        default="CONTRIBUTOR",
                        max_length=20,
                    ),
                ),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="members",
                        to="projects.project",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="projectmember_set",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["joined_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("project", "user"), name="unique_project_member"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProjectRequest",
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
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="requests",
                        to="projects.project",
                    ),
                ),
                (
                    "receiver",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_projectrequests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_projectrequests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["project", "status"], name="projectreq_proj_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "PENDING")),
                        fields=("sender", "receiver", "project", "type"),
                        name="unique_pending_project_request",
                    ),
                ],
            },
        ),
    ]
