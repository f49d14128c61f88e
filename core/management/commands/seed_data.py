import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from core.lifecycle import resolve_request, submit_join_request
from projects.models import Project, ProjectMember, ProjectRequest
from teams.models import HackTeam, HackTeamMember, HackTeamRequest

User = get_user_model()


class Command(BaseCommand):
    help = "Seeds the database with sample users, hack teams, projects and join requests"

    def add_arguments(self, parser):
        parser.add_argument("--password", default="togethr-demo-42", help="Password for every seeded user")

    def _user(self, username, name, password, **extra):
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@example.com", "name": name, **extra},
        )
        if created:
            user.set_password(password)
            user.save()
            self.stdout.write(f"Created user: {user.email}")
        return user

    def handle(self, *args, **options):
        self.stdout.write("🌱 Seeding data...")
        password = options["password"]

        # 1. Users
        admin = self._user("admin", "Admin", password, is_staff=True, is_superuser=True)
        alice = self._user("alice", "Alice Rao", password, skills=["react", "typescript"])
        bob = self._user("bob", "Bob Mehta", password, skills=["django", "postgres"])
        carol = self._user("carol", "Carol Singh", password, skills=["figma", "ux"])

        # 2. Hack teams
        now = timezone.now()
        teams_data = [
            {
                "name": "Null Pointers",
                "hack_name": "Build for Good",
                "hack_location": "Bengaluru",
                "hack_mode": HackTeam.MODE_OFFLINE,
                "size": 4,
                "skill_stack": ["react", "django"],
                "hack_begins": now + timezone.timedelta(days=12),
                "hack_ends": now + timezone.timedelta(days=14),
            },
            {
                "name": "Async Avengers",
                "hack_name": "Global AI Jam",
                "hack_location": "Online",
                "hack_mode": HackTeam.MODE_ONLINE,
                "size": 3,
                "skill_stack": ["python", "pytorch"],
                "hack_begins": now + timezone.timedelta(days=5),
                "hack_ends": now + timezone.timedelta(days=6),
            },
        ]

        teams = []
        for data in teams_data:
            team, created = HackTeam.objects.get_or_create(
                name=data["name"],
                defaults={
                    **data,
                    "owner": alice,
                    "origin": "Bengaluru, India",
                    "team_desc": "Looking for people who ship.",
                    "spots_left": data["size"] - 1,
                    "team_lead_email": alice.email,
                },
            )
            if created:
                HackTeamMember.objects.create(team=team, user=alice, role=HackTeam.OWNER_ROLE, name=alice.display_name)
                self.stdout.write(f"Created hack team: {team.name}")
            teams.append(team)

        # 3. Projects
        projects_data = [
            ("Campus Rideshare", Project.STAGE_MVP, ["flutter", "firebase"], ["mobility", "students"]),
            ("Open Notes", Project.STAGE_IDEA, ["nextjs", "django"], ["education", "open-source"]),
        ]
        projects = []
        for title, stage, skills, tags in projects_data:
            project, created = Project.objects.get_or_create(
                title=title,
                defaults={
                    "owner": bob,
                    "short_desc": f"{title} for everyone",
                    "detailed_desc": f"{title} is a community side project.",
                    "stage": stage,
                    "skill_stack": skills,
                    "tags": tags,
                    "commitment": random.choice([c for c, _ in Project.COMMITMENT_CHOICES]),
                    "contact_email": bob.email,
                    "owner_linkedin_url": "https://www.linkedin.com/in/bob-demo",
                },
            )
            if created:
                ProjectMember.objects.create(project=project, user=bob, role=Project.OWNER_ROLE, name=bob.display_name)
                self.stdout.write(f"Created project: {project.title}")
            projects.append(project)

        # 4. Requests, through the same lifecycle the API uses
        if not HackTeamRequest.objects.filter(team=teams[0], sender=carol).exists():
            req = submit_join_request(
                HackTeam, teams[0].pk, carol,
                "I can own the design side.",
                "https://github.com/carol-demo",
                "https://www.linkedin.com/in/carol-demo",
            )
            resolve_request(HackTeamRequest, req.pk, alice, HackTeamRequest.STATUS_ACCEPTED)

        if not ProjectRequest.objects.filter(project=projects[0], sender=alice).exists():
            submit_join_request(
                Project, projects[0].pk, alice,
                "Happy to build the web client.",
                "https://github.com/alice-demo",
                "https://www.linkedin.com/in/alice-demo",
            )

        self.stdout.write(f"Admin login: {admin.email}")
        self.stdout.write("✅ Seeding Complete!")
