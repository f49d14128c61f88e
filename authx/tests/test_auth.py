from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

User = get_user_model()

STRONG_PASSWORD = "Orbit-Lantern-42"


class SignupTests(APITestCase):
    def setUp(self):
        self.client = APIClient()

    def test_signup(self):
        resp = self.client.post(
            "/api/auth/signup/",
            {"name": "Priya Shah", "email": "Priya@Example.com", "password": STRONG_PASSWORD},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        body = resp.json()
        self.assertEqual(body["message"], "User created successfully")
        self.assertEqual(body["data"]["email"], "priya@example.com")
        self.assertEqual(body["data"]["slug"], "priya-shah")
        self.assertEqual(body["data"]["onboarding_status"], User.ONBOARDING_NOT_STARTED)

        user = User.objects.get(email="priya@example.com")
        self.assertEqual(user.username, "priya")
        self.assertTrue(user.check_password(STRONG_PASSWORD))

    def test_duplicate_email(self):
        User.objects.create_user(username="priya", email="priya@example.com", password=STRONG_PASSWORD)
        resp = self.client.post(
            "/api/auth/signup/",
            {"name": "Priya Again", "email": "PRIYA@example.com", "password": STRONG_PASSWORD},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["fields"][0]["field"], "email")

    def test_username_clash_gets_suffix(self):
        User.objects.create_user(username="sam", email="sam@other.org", password=STRONG_PASSWORD)
        resp = self.client.post(
            "/api/auth/signup/",
            {"name": "Sam Two", "email": "sam@example.com", "password": STRONG_PASSWORD},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.content)
        self.assertNotEqual(User.objects.get(email="sam@example.com").username, "sam")

    def test_weak_password(self):
        resp = self.client.post(
            "/api/auth/signup/",
            {"name": "Weak One", "email": "weak@example.com", "password": "123"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email="weak@example.com").exists())


class LoginTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username="priya", email="priya@example.com", password=STRONG_PASSWORD, name="Priya"
        )

    def test_login_returns_tokens(self):
        resp = self.client.post(
            "/api/auth/login/", {"email": "PRIYA@example.com", "password": STRONG_PASSWORD}, format="json"
        )
        self.assertEqual(resp.status_code, 200, resp.content)
        body = resp.json()
        self.assertTrue(body["access"])
        self.assertTrue(body["refresh"])
        self.assertEqual(body["user"]["id"], self.user.id)

        # the access token authenticates API calls
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {body['access']}")
        resp = client.get("/api/auth/me/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["email"], "priya@example.com")

    def test_wrong_password(self):
        resp = self.client.post(
            "/api/auth/login/", {"email": "priya@example.com", "password": "nope-nope"}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json(), {
            "success": False,
            "error": "Invalid credentials",
            "fields": [{"field": "non_field_errors", "message": "Invalid credentials"}],
        })

    def test_unknown_email(self):
        resp = self.client.post(
            "/api/auth/login/", {"email": "ghost@example.com", "password": STRONG_PASSWORD}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_me_requires_token(self):
        resp = self.client.get("/api/auth/me/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(resp.json()["success"])
