from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.test import TestCase
from rest_framework.test import APIClient

from users.models import User


class LoginTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@remedyflow.test",
            password="S3cure-pass",
            role=User.ROLE_ADMIN,
        )

    def test_login_opens_session_and_returns_profile(self):
        resp = self.client.post(
            "/api/auth/login/",
            {"email": "admin@remedyflow.test", "password": "S3cure-pass"},
            format="json",
        )

        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.data["success"])
        self.assertEqual(resp.data["data"]["email"], "admin@remedyflow.test")
        self.assertTrue(resp.data["data"]["isAdmin"])

        me = self.client.get("/api/auth/me/")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data["data"]["role"], "admin")

    def test_bad_password_is_unauthorized_envelope(self):
        resp = self.client.post(
            "/api/auth/login/",
            {"email": "admin@remedyflow.test", "password": "wrong"},
            format="json",
        )

        self.assertEqual(resp.status_code, 401)
        self.assertFalse(resp.data["success"])
        self.assertEqual(resp.data["error"], "Unauthorized")

    def test_me_requires_authentication(self):
        resp = self.client.get("/api/auth/me/")
        self.assertEqual(resp.status_code, 401)
        self.assertFalse(resp.data["success"])

    def test_jwt_create_issues_tokens(self):
        resp = self.client.post(
            "/api/auth/jwt/create/",
            {"email": "admin@remedyflow.test", "password": "S3cure-pass"},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertIn("access", resp.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.data['access']}")
        me = self.client.get("/api/auth/me/")
        self.assertEqual(me.status_code, 200)


class UserManagerTests(TestCase):
    def test_default_role_is_customer(self):
        user = User.objects.create_user(email="Shopper@Example.COM", password="x")
        self.assertEqual(user.role, User.ROLE_CUSTOMER)
        self.assertFalse(user.is_storefront_admin)
        self.assertEqual(user.email, "Shopper@example.com")

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser("root@example.com", password="x")
        self.assertEqual(user.role, User.ROLE_ADMIN)
        self.assertTrue(user.is_storefront_admin)

    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="x")


class EnsureSuperuserCommandTests(TestCase):
    def test_skips_without_credentials(self):
        out = StringIO()
        with mock.patch.dict("os.environ", {"AUTO_ADMIN_EMAIL": "", "AUTO_ADMIN_PASSWORD": ""}):
            call_command("ensure_superuser", stdout=out, email="", password="")
        self.assertIn("Skipping", out.getvalue())
        self.assertFalse(User.objects.exists())

    def test_creates_then_updates_admin(self):
        out = StringIO()
        call_command("ensure_superuser", email="boss@example.com", password="first", stdout=out)

        user = User.objects.get(email="boss@example.com")
        self.assertTrue(user.is_superuser)
        self.assertTrue(user.check_password("first"))

        user.role = User.ROLE_CUSTOMER
        user.save()

        call_command("ensure_superuser", email="boss@example.com", password="second", stdout=out)
        user.refresh_from_db()
        self.assertEqual(user.role, User.ROLE_ADMIN)
        self.assertTrue(user.check_password("second"))
        self.assertIn("(updated)", out.getvalue())
