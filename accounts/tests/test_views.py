from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from accounts.models import User


class RegistrationTests(APITestCase):

    def _payload(self, **overrides) -> dict:
        payload = {
            "name": "Sam Lee",
            "email": "Sam@Example.com",
            "password": "Str0ng!Pass",
            "role": "jobseeker",
            "state": "NSW",
        }
        payload.update(overrides)
        return payload

    def test_register_job_seeker(self) -> None:
        response = self.client.post(reverse("register"), self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        user = User.objects.get(email="sam@example.com")
        self.assertEqual(user.username, "sam@example.com")
        self.assertEqual(user.role, User.JOB_SEEKER)
        self.assertTrue(user.check_password("Str0ng!Pass"))

    def test_missing_field(self) -> None:
        response = self.client.post(reverse("register"), self._payload(state=""), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "All fields are required"})

    def test_admin_role_is_forbidden(self) -> None:
        response = self.client.post(reverse("register"), self._payload(role="admin"), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(User.objects.exists())

    def test_invalid_email(self) -> None:
        response = self.client.post(
            reverse("register"), self._payload(email="not-an-email"), format="json"
        )

        self.assertEqual(response.data, {"error": "Invalid email format"})

    def test_weak_password(self) -> None:
        for password in ("short1!", "alllowercase1!", "NoDigits!!", "NoSymbols123"):
            response = self.client.post(
                reverse("register"), self._payload(password=password), format="json"
            )
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_email(self) -> None:
        self.client.post(reverse("register"), self._payload(), format="json")

        response = self.client.post(
            reverse("register"), self._payload(email="SAM@example.com"), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(User.objects.count(), 1)


class LoginTests(APITestCase):

    def setUp(self) -> None:
        self.user = User.objects.create_user(
            username="sam@example.com", email="sam@example.com",
            password="Str0ng!Pass", role=User.EMPLOYER,
        )

    def test_login_returns_token(self) -> None:
        response = self.client.post(
            reverse("login"), {"email": "SAM@example.com", "password": "Str0ng!Pass"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["token"], Token.objects.get(user=self.user).key)
        self.assertEqual(response.data["user"]["role"], User.EMPLOYER)
        self.assertNotIn("password", response.data["user"])

    def test_token_authenticates_requests(self) -> None:
        login = self.client.post(
            reverse("login"), {"email": "sam@example.com", "password": "Str0ng!Pass"}, format="json"
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {login.data['token']}")

        response = self.client.get(reverse("user-me"))

        self.assertEqual(response.data["email"], "sam@example.com")

    def test_bad_credentials(self) -> None:
        response = self.client.post(
            reverse("login"), {"email": "sam@example.com", "password": "wrong"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {"error": "Invalid credentials"})

    def test_inactive_user_cannot_login(self) -> None:
        User.objects.filter(pk=self.user.pk).update(is_active=False)

        response = self.client.post(
            reverse("login"), {"email": "sam@example.com", "password": "Str0ng!Pass"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_fields(self) -> None:
        response = self.client.post(reverse("login"), {"email": "sam@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class UserAdminTests(APITestCase):

    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            username="admin@example.com", email="admin@example.com",
            password="Secret123!", role=User.ADMIN,
        )
        self.other_admin = User.objects.create_user(
            username="admin2@example.com", email="admin2@example.com",
            password="Secret123!", role=User.ADMIN,
        )
        self.seeker = User.objects.create_user(
            username="seeker@example.com", email="seeker@example.com",
            password="Secret123!", role=User.JOB_SEEKER,
        )
        self.employer = User.objects.create_user(
            username="employer@example.com", email="employer@example.com",
            password="Secret123!", role=User.EMPLOYER,
        )

    def test_list_excludes_admins(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("user-list"))

        self.assertEqual(
            {row["email"] for row in response.data},
            {"seeker@example.com", "employer@example.com"},
        )

    def test_list_is_admin_only(self) -> None:
        self.client.force_authenticate(self.seeker)

        response = self.client.get(reverse("user-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["detail"], "Admins only")

    def test_toggle_active(self) -> None:
        self.client.force_authenticate(self.admin)
        url = reverse("user-active", args=[self.seeker.pk])

        response = self.client.patch(url, {"active": False}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.seeker.refresh_from_db()
        self.assertFalse(self.seeker.is_active)

        response = self.client.patch(url, {"active": "no"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_user(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("user-detail", args=[self.seeker.pk]))
        self.assertEqual(response.data, {"message": "User deleted."})
        self.assertFalse(User.objects.filter(pk=self.seeker.pk).exists())

        response = self.client.delete(reverse("user-detail", args=[self.seeker.pk]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_bulk_delete_skips_admins(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("user-bulk-delete"),
            {"ids": [self.seeker.pk, self.employer.pk, self.other_admin.pk]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            set(User.objects.values_list("email", flat=True)),
            {"admin@example.com", "admin2@example.com"},
        )

    def test_bulk_delete_requires_ids(self) -> None:
        self.client.force_authenticate(self.admin)

        for payload in ({}, {"ids": []}, {"ids": "1,2"}):
            response = self.client.post(reverse("user-bulk-delete"), payload, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_user_cannot_change_own_role(self) -> None:
        self.client.force_authenticate(self.seeker)

        response = self.client.patch(
            reverse("user-detail", args=[self.seeker.pk]),
            {"role": User.ADMIN, "state": "QLD"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.seeker.refresh_from_db()
        self.assertEqual(self.seeker.role, User.JOB_SEEKER)
        self.assertEqual(self.seeker.state, "")

    def test_user_cannot_view_others(self) -> None:
        self.client.force_authenticate(self.seeker)

        response = self.client.get(reverse("user-detail", args=[self.employer.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
