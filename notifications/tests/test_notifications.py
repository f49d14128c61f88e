from datetime import timedelta
from unittest import mock

from django.contrib.auth import get_user_model
from django.core import mail
from django.core.cache import cache
from django.test import override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from notifications.models import Notification
from projects.models import Project, ProjectMember
from teams.models import HackTeam, HackTeamMember, HackTeamRequest

User = get_user_model()


@override_settings(
    EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend",
    APP_URL="https://togethr.test",
)
class RequestNotificationTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.lead = User.objects.create_user(
            username="lead", email="lead@example.com", password="pass1234", name="Lead Dev"
        )
        self.applicant = User.objects.create_user(
            username="applicant", email="applicant@example.com", password="pass1234", name="Applicant"
        )
        now = timezone.now()
        self.team = HackTeam.objects.create(
            owner=self.lead,
            name="Null Pointers",
            origin="Pune, India",
            size=3,
            spots_left=2,
            skill_stack=["react"],
            hack_name="Build for Good",
            hack_begins=now,
            hack_ends=now + timedelta(days=1),
            hack_location="Pune",
            hack_mode=HackTeam.MODE_OFFLINE,
            team_lead_email="team-inbox@example.com",
        )
        HackTeamMember.objects.create(team=self.team, user=self.lead, role=HackTeam.OWNER_ROLE)
        self.payload = {
            "message": "Count me in",
            "githubURL": "https://github.com/applicant",
            "linkedinURL": "https://www.linkedin.com/in/applicant",
        }

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def test_join_request_notifies_lead_after_commit(self):
        self.auth(self.applicant)
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            resp = self.client.post(f"/api/hack-team-requests/{self.team.id}/", self.payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        self.assertEqual(len(callbacks), 1)

        note = Notification.objects.get(user=self.lead)
        self.assertEqual(note.type, Notification.TYPE_JOIN_REQUEST)
        self.assertEqual(note.link, f"/hack-team/{self.team.id}")

        self.assertEqual(len(mail.outbox), 1)
        email = mail.outbox[0]
        self.assertEqual(email.to, ["team-inbox@example.com"])
        self.assertEqual(email.subject, "New join request for your team")
        self.assertIn(f"https://togethr.test/hack-team/{self.team.id}", email.body)
        self.assertIn("https://github.com/applicant", email.body)

    def test_failed_request_sends_nothing(self):
        self.auth(self.lead)
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            resp = self.client.post(f"/api/hack-team-requests/{self.team.id}/", self.payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(callbacks, [])
        self.assertEqual(len(mail.outbox), 0)

    def test_email_failure_does_not_break_the_request(self):
        self.auth(self.applicant)
        with mock.patch("notifications.tasks.send_join_request_email", side_effect=OSError("smtp down")):
            with self.assertLogs("togethr.notifications", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    resp = self.client.post(
                        f"/api/hack-team-requests/{self.team.id}/", self.payload, format="json"
                    )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Notification.objects.filter(user=self.lead).exists())

    def test_resolution_notifies_sender(self):
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)
        self.auth(self.lead)
        with self.captureOnCommitCallbacks(execute=True):
            resp = self.client.patch(
                f"/api/hack-team-requests/status/{req.id}/", {"status": "ACCEPTED"}, format="json"
            )
        self.assertEqual(resp.status_code, 200)

        note = Notification.objects.get(user=self.applicant)
        self.assertEqual(note.type, Notification.TYPE_REQUEST_ACCEPTED)
        self.assertEqual(mail.outbox[0].to, ["applicant@example.com"])
        self.assertEqual(mail.outbox[0].subject, "Your request has been approved!")

    def test_withdrawal_is_silent(self):
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)
        self.auth(self.applicant)
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            resp = self.client.patch(
                f"/api/hack-team-requests/status/{req.id}/", {"status": "CANCELLED"}, format="json"
            )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(callbacks, [])
        self.assertFalse(Notification.objects.exists())

    def test_project_invite_email(self):
        project = Project.objects.create(
            owner=self.lead,
            title="Open Notes",
            short_desc="Notes",
            detailed_desc="Shared notes",
            stage=Project.STAGE_IDEA,
            skill_stack=["django"],
            tags=["education"],
            commitment=Project.COMMITMENT_LOW,
            contact_email="lead@example.com",
            owner_linkedin_url="https://www.linkedin.com/in/lead",
        )
        ProjectMember.objects.create(project=project, user=self.lead, role=Project.OWNER_ROLE)

        self.auth(self.lead)
        with self.captureOnCommitCallbacks(execute=True):
            resp = self.client.post(
                f"/api/projects/{project.id}/invite/",
                {"userId": self.applicant.id, "message": "We need you"},
                format="json",
            )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        self.assertEqual(Notification.objects.get(user=self.applicant).type, Notification.TYPE_INVITE)
        self.assertEqual(mail.outbox[0].subject, "You have been invited to collaborate on a project")
        self.assertIn(f"https://togethr.test/projects/{project.id}", mail.outbox[0].body)

    def test_invite_resolution_tells_the_lead(self):
        invite = HackTeamRequest.objects.create(
            team=self.team, sender=self.lead, receiver=self.applicant, type=HackTeamRequest.TYPE_INVITE
        )
        self.auth(self.applicant)
        with self.captureOnCommitCallbacks(execute=True):
            resp = self.client.patch(
                f"/api/hack-team-requests/status/{invite.id}/", {"status": "ACCEPTED"}, format="json"
            )
        self.assertEqual(resp.status_code, 200, resp.content)

        note = Notification.objects.get(user=self.lead)
        self.assertEqual(note.type, Notification.TYPE_INVITE_ACCEPTED)
        self.assertEqual(note.title, "Applicant accepted your invite to Null Pointers")
        self.assertFalse(Notification.objects.filter(user=self.applicant).exists())

        email = mail.outbox[0]
        self.assertEqual(email.to, ["lead@example.com"])
        self.assertEqual(email.subject, "Your team invite was accepted")
        self.assertIn("Applicant accepted your invite to Null Pointers", email.body)
        self.assertNotIn("Your request", email.body)

    def test_declined_invite(self):
        invite = HackTeamRequest.objects.create(
            team=self.team, sender=self.lead, receiver=self.applicant, type=HackTeamRequest.TYPE_INVITE
        )
        self.auth(self.applicant)
        with self.captureOnCommitCallbacks(execute=True):
            self.client.patch(
                f"/api/hack-team-requests/status/{invite.id}/", {"status": "REJECTED"}, format="json"
            )
        self.assertEqual(Notification.objects.get(user=self.lead).type, Notification.TYPE_INVITE_DECLINED)
        self.assertEqual(mail.outbox[0].subject, "Your team invite was declined")

    def test_unreachable_broker_does_not_break_the_request(self):
        self.auth(self.applicant)
        with mock.patch(
            "notifications.tasks.notify_join_request_task.delay", side_effect=ConnectionError("broker down")
        ):
            with self.assertLogs("togethr.lifecycle", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    resp = self.client.post(
                        f"/api/hack-team-requests/{self.team.id}/", self.payload, format="json"
                    )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        self.assertTrue(HackTeamRequest.objects.filter(sender=self.applicant).exists())

    def test_in_app_failure_still_sends_email(self):
        self.auth(self.applicant)
        with mock.patch("notifications.tasks.Notification.objects.create", side_effect=RuntimeError("db")):
            with self.assertLogs("togethr.notifications", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    resp = self.client.post(
                        f"/api/hack-team-requests/{self.team.id}/", self.payload, format="json"
                    )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["team-inbox@example.com"])


class MyNotificationsTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="noti_user", email="noti@example.com", password="pass1234")
        self.other = User.objects.create_user(username="other", email="other@example.com", password="pass1234")

        Notification.objects.create(user=self.user, type=Notification.TYPE_SYSTEM, title="System notice")
        Notification.objects.create(user=self.user, type=Notification.TYPE_INVITE, title="Invite")
        Notification.objects.create(user=self.other, type=Notification.TYPE_SYSTEM, title="Other user")
        self.client.force_authenticate(user=self.user)

    def test_list_only_mine(self):
        resp = self.client.get("/api/notifications/me/")
        self.assertEqual(resp.status_code, 200)
        titles = {n["title"] for n in resp.json()["data"]}
        self.assertEqual(titles, {"System notice", "Invite"})

    def test_mark_some_then_all_read(self):
        first = Notification.objects.get(title="Invite")
        resp = self.client.post("/api/notifications/me/", {"ids": [first.id]}, format="json")
        self.assertEqual(resp.json()["marked_read"], 1)

        resp = self.client.get("/api/notifications/me/?unread=true")
        self.assertEqual(len(resp.json()["data"]), 1)

        resp = self.client.post("/api/notifications/me/", {"ids": []}, format="json")
        self.assertEqual(resp.json()["marked_read"], 1)
        self.assertFalse(Notification.objects.filter(user=self.other, is_read=True).exists())

    def test_ids_must_be_a_list(self):
        resp = self.client.post("/api/notifications/me/", {"ids": "all"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
