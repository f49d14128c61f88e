from datetime import timedelta
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from gamification.models import TrustLog
from teams.models import HackTeam, HackTeamMember, HackTeamRequest

User = get_user_model()


def make_team(owner, **overrides):
    now = timezone.now()
    data = {
        "name": "Null Pointers",
        "origin": "Pune, India",
        "size": 3,
        "spots_left": 2,
        "skill_stack": ["react", "django"],
        "hack_name": "Build for Good",
        "hack_begins": now + timedelta(days=3),
        "hack_ends": now + timedelta(days=4),
        "hack_location": "Pune",
        "hack_mode": HackTeam.MODE_OFFLINE,
        "team_lead_email": owner.email,
    }
    data.update(overrides)
    team = HackTeam.objects.create(owner=owner, **data)
    HackTeamMember.objects.create(team=team, user=owner, role=HackTeam.OWNER_ROLE, name=owner.display_name)
    return team


class HackTeamApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.lead = User.objects.create_user(
            username="lead", email="lead@example.com", password="pass1234", name="Lead Dev"
        )
        self.member = User.objects.create_user(
            username="member", email="member@example.com", password="pass1234", name="Member Dev"
        )
        self.outsider = User.objects.create_user(
            username="outsider", email="outsider@example.com", password="pass1234"
        )

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def test_create_team_seats_the_lead(self):
        self.auth(self.lead)
        now = timezone.now()
        payload = {
            "name": "  Async   Avengers ",
            "origin_city": "Delhi",
            "origin_country": "India",
            "size": 4,
            "skill_stack": ["React", "react", "Go"],
            "hack_name": "AI Jam",
            "hack_begins": (now + timedelta(days=1)).isoformat(),
            "hack_ends": (now + timedelta(days=2)).isoformat(),
            "hack_location": "Delhi",
            "hack_mode": "HYBRID",
            "team_lead_email": "Lead@Example.com",
        }
        resp = self.client.post("/api/hack-team/", payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Team created successfully")

        team = HackTeam.objects.get(pk=body["data"]["id"])
        self.assertEqual(team.name, "Async Avengers")
        self.assertEqual(team.origin, "Delhi, India")
        self.assertEqual(team.spots_left, 3)
        self.assertEqual(team.skill_stack, ["react", "go"])
        self.assertEqual(team.status, HackTeam.STATUS_OPEN)
        self.assertTrue(
            HackTeamMember.objects.filter(team=team, user=self.lead, role=HackTeam.OWNER_ROLE).exists()
        )

    def test_create_team_rejects_bad_dates(self):
        self.auth(self.lead)
        now = timezone.now()
        payload = {
            "name": "Backwards",
            "origin_city": "Delhi",
            "origin_country": "India",
            "size": 2,
            "skill_stack": ["python"],
            "hack_name": "Time Travel Hack",
            "hack_begins": (now + timedelta(days=2)).isoformat(),
            "hack_ends": (now + timedelta(days=1)).isoformat(),
            "hack_location": "Delhi",
            "hack_mode": "ONLINE",
            "team_lead_email": "lead@example.com",
        }
        resp = self.client.post("/api/hack-team/", payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["fields"][0]["field"], "hack_ends")
        self.assertFalse(HackTeam.objects.exists())

    def test_create_team_requires_auth(self):
        resp = self.client.post("/api/hack-team/", {}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_public_listing_is_paginated_and_open_only(self):
        for i in range(3):
            make_team(self.lead, name=f"Team {i}")
        make_team(self.lead, name="Done", status=HackTeam.STATUS_COMPLETED)

        resp = self.client.get("/api/hack-team/?limit=2")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(len(data["items"]), 2)
        self.assertEqual(data["meta"], {"total": 3, "page": 1, "limit": 2, "totalPages": 2})
        # newest first
        self.assertEqual(data["items"][0]["name"], "Team 2")

        resp = self.client.get("/api/hack-team/?limit=2&page=2")
        self.assertEqual(len(resp.json()["data"]["items"]), 1)

    def test_invalid_page_params_fall_back_to_defaults(self):
        make_team(self.lead)
        resp = self.client.get("/api/hack-team/?page=abc&limit=-4")
        meta = resp.json()["data"]["meta"]
        self.assertEqual(meta["page"], 1)
        self.assertEqual(meta["limit"], 20)

    def test_listing_filters(self):
        make_team(self.lead, name="Online Crew", hack_mode=HackTeam.MODE_ONLINE, skill_stack=["rust"])
        make_team(self.lead, name="Offline Crew", hack_name="Smart India Hackathon", size=5)

        resp = self.client.get("/api/hack-team/?mode=online")
        names = [t["name"] for t in resp.json()["data"]["items"]]
        self.assertEqual(names, ["Online Crew"])

        resp = self.client.get("/api/hack-team/?hackname=smart")
        names = [t["name"] for t in resp.json()["data"]["items"]]
        self.assertEqual(names, ["Offline Crew"])

        resp = self.client.get("/api/hack-team/?teamSize=5")
        names = [t["name"] for t in resp.json()["data"]["items"]]
        self.assertEqual(names, ["Offline Crew"])

        resp = self.client.get("/api/hack-team/?skills=Rust,elixir")
        names = [t["name"] for t in resp.json()["data"]["items"]]
        self.assertEqual(names, ["Online Crew"])

    def test_scopes(self):
        mine = make_team(self.lead, name="Mine")
        other = make_team(self.outsider, name="Theirs")
        joined = make_team(self.outsider, name="Joined")
        HackTeamMember.objects.create(team=joined, user=self.lead, name="Lead Dev")
        HackTeamRequest.objects.create(team=other, sender=self.lead, receiver=self.outsider)
        HackTeamRequest.objects.create(
            team=mine, sender=self.lead, receiver=self.member, type=HackTeamRequest.TYPE_INVITE
        )

        # personal scopes need a session
        resp = self.client.get("/api/hack-team/?scope=MY_TEAM")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

        self.auth(self.lead)
        scopes = {
            "MY_TEAM": [mine.name],
            # pending requests of either type
            "REQUESTED": sorted([other.name, mine.name]),
            # the lead sits on their own team too
            "JOINED_IN": sorted([joined.name, mine.name]),
        }
        for scope, expected in scopes.items():
            resp = self.client.get(f"/api/hack-team/?scope={scope}")
            names = sorted(t["name"] for t in resp.json()["data"]["items"])
            self.assertEqual(names, expected, scope)

        resp = self.client.get("/api/hack-team/?scope=EVERYTHING")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detail_hides_other_peoples_requests(self):
        team = make_team(self.lead)
        HackTeamRequest.objects.create(team=team, sender=self.member, receiver=self.lead)
        HackTeamRequest.objects.create(team=team, sender=self.outsider, receiver=self.lead)

        self.auth(self.lead)
        resp = self.client.get(f"/api/hack-team/{team.id}/")
        data = resp.json()["data"]
        self.assertTrue(data["is_owner"])
        self.assertEqual(len(data["requests"]), 2)
        self.assertEqual(len(data["members"]), 1)

        self.auth(self.member)
        resp = self.client.get(f"/api/hack-team/{team.id}/")
        data = resp.json()["data"]
        self.assertFalse(data["is_owner"])
        self.assertEqual([r["sender"]["id"] for r in data["requests"]], [self.member.id])

    def test_detail_not_found(self):
        self.auth(self.lead)
        resp = self.client.get("/api/hack-team/9999/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json(), {"success": False, "error": "Team not found"})


class HackTeamTransitionTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.lead = User.objects.create_user(username="lead", email="lead@example.com", password="pass1234")
        self.member = User.objects.create_user(username="member", email="member@example.com", password="pass1234")
        self.outsider = User.objects.create_user(username="outsider", email="outsider@example.com", password="pass1234")
        self.team = make_team(self.lead)
        HackTeamMember.objects.create(team=self.team, user=self.member, name="member")

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def test_complete_rewards_every_member_once(self):
        self.auth(self.lead)
        url = f"/api/hack-team/{self.team.id}/complete/"

        resp = self.client.patch(url)
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.json(), {
            "success": True,
            "message": "Team completed successfully",
            "data": {"id": self.team.id, "status": "COMPLETED"},
        })

        self.lead.refresh_from_db()
        self.member.refresh_from_db()
        self.assertEqual(self.lead.trust_points, HackTeam.COMPLETION_REWARD)
        self.assertEqual(self.member.trust_points, HackTeam.COMPLETION_REWARD)
        self.assertEqual(TrustLog.objects.filter(reason="team.completed").count(), 2)

        # second attempt changes nothing
        resp = self.client.patch(url)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "Team is already closed")
        self.member.refresh_from_db()
        self.assertEqual(self.member.trust_points, HackTeam.COMPLETION_REWARD)

    def test_only_lead_can_complete(self):
        self.auth(self.member)
        resp = self.client.patch(f"/api/hack-team/{self.team.id}/complete/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["error"], "Only team leader can complete the team")
        self.team.refresh_from_db()
        self.assertEqual(self.team.status, HackTeam.STATUS_OPEN)

    def test_non_lead_is_forbidden_on_closed_team(self):
        self.team.status = HackTeam.STATUS_COMPLETED
        self.team.save()
        self.auth(self.member)
        resp = self.client.patch(f"/api/hack-team/{self.team.id}/cancel/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["error"], "Only team leader can cancel the team")

    def test_failed_reward_rolls_back_completion(self):
        self.auth(self.lead)
        with mock.patch(
            "gamification.engine.TrustLog.objects.bulk_create", side_effect=RuntimeError("disk full")
        ):
            with self.assertLogs("togethr.api", level="ERROR"):
                resp = self.client.patch(f"/api/hack-team/{self.team.id}/complete/")
        self.assertEqual(resp.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

        self.team.refresh_from_db()
        self.member.refresh_from_db()
        self.assertEqual(self.team.status, HackTeam.STATUS_OPEN)
        self.assertEqual(self.member.trust_points, 0)
        self.assertFalse(TrustLog.objects.exists())

    def test_losing_a_concurrent_close(self):
        self.auth(self.lead)
        # another request closed the team between the read and the update
        with mock.patch("django.db.models.query.QuerySet.update", return_value=0):
            resp = self.client.patch(f"/api/hack-team/{self.team.id}/complete/")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "Team is already closed")
        self.assertFalse(TrustLog.objects.exists())

    def test_cancel_awards_nothing(self):
        self.auth(self.lead)
        resp = self.client.patch(f"/api/hack-team/{self.team.id}/cancel/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["status"], "CANCELLED")
        self.assertFalse(TrustLog.objects.exists())

        resp = self.client.patch(f"/api/hack-team/{self.team.id}/complete/")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_transition_missing_team(self):
        self.auth(self.lead)
        resp = self.client.patch("/api/hack-team/9999/complete/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)


class HackTeamRequestTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.lead = User.objects.create_user(
            username="lead", email="lead@example.com", password="pass1234", name="Lead Dev"
        )
        self.applicant = User.objects.create_user(
            username="applicant", email="applicant@example.com", password="pass1234", name="Applicant"
        )
        self.team = make_team(self.lead, size=2, spots_left=1)
        self.payload = {
            "message": "I would love to help with the frontend.",
            "githubURL": "https://github.com/applicant",
            "linkedinURL": "https://www.linkedin.com/in/applicant",
        }

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def _join(self, team=None):
        team = team or self.team
        return self.client.post(f"/api/hack-team-requests/{team.id}/", self.payload, format="json")

    def _resolve(self, req_id, new_status):
        return self.client.patch(
            f"/api/hack-team-requests/status/{req_id}/", {"status": new_status}, format="json"
        )

    def test_join_request_created(self):
        self.auth(self.applicant)
        resp = self._join()
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        body = resp.json()
        self.assertEqual(body["message"], "Join request sent successfully")
        self.assertEqual(body["request"]["status"], "PENDING")
        self.assertEqual(body["request"]["type"], "JOIN")
        self.assertEqual(body["request"]["receiver"]["id"], self.lead.id)
        self.assertEqual(body["request"]["github_url"], self.payload["githubURL"])

    def test_join_request_missing_fields(self):
        self.auth(self.applicant)
        self.payload["linkedinURL"] = "   "
        resp = self._join()
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "All fields are required")

    def test_join_request_unknown_team(self):
        self.auth(self.applicant)
        resp = self.client.post("/api/hack-team-requests/9999/", self.payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json()["error"], "Team not found")

    def test_cannot_join_own_team(self):
        self.auth(self.lead)
        resp = self._join()
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "You cannot join your own team")

    def test_duplicate_join_request(self):
        self.auth(self.applicant)
        self.assertEqual(self._join().status_code, 201)
        resp = self._join()
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.json()["error"], "Join request already sent")
        self.assertEqual(HackTeamRequest.objects.count(), 1)

    def test_closed_team_takes_requests_but_not_members(self):
        self.team.status = HackTeam.STATUS_COMPLETED
        self.team.save()
        self.auth(self.applicant)
        resp = self._join()
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        req_id = resp.json()["request"]["id"]

        self.auth(self.lead)
        resp = self._resolve(req_id, "ACCEPTED")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "This team is already closed")
        self.assertFalse(HackTeamMember.objects.filter(user=self.applicant).exists())

    def test_duplicate_insert_race_maps_to_conflict(self):
        HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)
        self.auth(self.applicant)
        # the pre-check misses the existing row, the partial unique constraint catches it
        with mock.patch("django.db.models.query.QuerySet.exists", return_value=False):
            resp = self._join()
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.json()["error"], "Join request already sent")
        self.assertEqual(HackTeamRequest.objects.count(), 1)

    def test_losing_a_concurrent_resolution(self):
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)
        self.auth(self.lead)
        with mock.patch("django.db.models.query.QuerySet.update", return_value=0):
            resp = self._resolve(req.id, "REJECTED")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "Request has already been processed")

    def test_join_request_requires_auth(self):
        resp = self._join()
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_accept_adds_member_and_rewards(self):
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)

        self.auth(self.lead)
        resp = self._resolve(req.id, "accepted")
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.json()["message"], "Request accepted successfully")
        self.assertEqual(resp.json()["request"]["status"], "ACCEPTED")

        self.team.refresh_from_db()
        self.applicant.refresh_from_db()
        self.assertEqual(self.team.spots_left, 0)
        self.assertTrue(HackTeamMember.objects.filter(team=self.team, user=self.applicant).exists())
        self.assertEqual(self.applicant.trust_points, HackTeam.ACCEPT_REWARD)
        self.assertTrue(TrustLog.objects.filter(user=self.applicant, reason="team.joined").exists())

        # already processed
        resp = self._resolve(req.id, "REJECTED")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "Request has already been processed")

    def test_accept_when_no_spots_left(self):
        self.team.spots_left = 0
        self.team.save()
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)

        self.auth(self.lead)
        resp = self._resolve(req.id, "ACCEPTED")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "No spots left in the team")

        req.refresh_from_db()
        self.assertEqual(req.status, HackTeamRequest.STATUS_PENDING)
        self.assertFalse(HackTeamMember.objects.filter(user=self.applicant).exists())

    def test_reject(self):
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)
        self.auth(self.lead)
        resp = self._resolve(req.id, "REJECTED")
        self.assertEqual(resp.status_code, 200)
        self.team.refresh_from_db()
        self.assertEqual(self.team.spots_left, 1)
        self.assertFalse(TrustLog.objects.exists())

    def test_only_receiver_can_respond(self):
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)
        self.auth(self.applicant)
        resp = self._resolve(req.id, "ACCEPTED")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_sender_can_withdraw(self):
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)

        self.auth(self.lead)
        self.assertEqual(self._resolve(req.id, "CANCELLED").status_code, status.HTTP_403_FORBIDDEN)

        self.auth(self.applicant)
        resp = self._resolve(req.id, "CANCELLED")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Request withdrawn successfully")

        # a fresh request is allowed once the old one is gone
        self.assertEqual(self._join().status_code, 201)

    def test_unknown_status_value(self):
        req = HackTeamRequest.objects.create(team=self.team, sender=self.applicant, receiver=self.lead)
        self.auth(self.lead)
        resp = self._resolve(req.id, "MAYBE")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["fields"][0]["field"], "status")

    def test_request_not_found(self):
        self.auth(self.lead)
        resp = self._resolve(9999, "ACCEPTED")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_invite_then_accept(self):
        self.auth(self.lead)
        resp = self.client.post(
            f"/api/hack-team/{self.team.id}/invite/",
            {"userId": self.applicant.id, "message": "Join us"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        req_id = resp.json()["request"]["id"]

        resp = self.client.post(
            f"/api/hack-team/{self.team.id}/invite/", {"userId": self.applicant.id}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)

        # the invitee, not the lead, answers
        self.assertEqual(self._resolve(req_id, "ACCEPTED").status_code, status.HTTP_403_FORBIDDEN)
        self.auth(self.applicant)
        self.assertEqual(self._resolve(req_id, "ACCEPTED").status_code, 200)
        self.assertTrue(HackTeamMember.objects.filter(team=self.team, user=self.applicant).exists())

    def test_invite_rules(self):
        self.auth(self.applicant)
        resp = self.client.post(
            f"/api/hack-team/{self.team.id}/invite/", {"userId": self.lead.id}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        self.auth(self.lead)
        resp = self.client.post(
            f"/api/hack-team/{self.team.id}/invite/", {"userId": self.lead.id}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.post(f"/api/hack-team/{self.team.id}/invite/", {"userId": 9999}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
