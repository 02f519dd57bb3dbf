from django.urls import reverse
from rest_framework.test import APITestCase

from accounts.models import User
from jobs.models import Category, JobPosting, JobPreference
from profiles.models import ProfileUpdateRequest


class DashboardTests(APITestCase):

    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            username="admin@example.com", email="admin@example.com",
            password="Secret123!", role=User.ADMIN, name="Alex",
        )
        self.employer = User.objects.create_user(
            username="employer@example.com", email="employer@example.com",
            password="Secret123!", role=User.EMPLOYER,
        )
        category = Category.objects.create(name="Nursing")
        JobPosting.objects.create(user=self.employer, title="Nurse", category=category)
        JobPreference.objects.create(user=self.employer, preferred_location="Perth")
        ProfileUpdateRequest.objects.create(user=self.employer, updates={"state": "WA"})

    def test_counts_for_owner(self) -> None:
        self.client.force_authenticate(self.employer)

        response = self.client.get(reverse("dashboard"))

        self.assertEqual(response.data["message"], "Welcome employer@example.com, Role: EMPLOYER")
        self.assertEqual(response.data["job_count"], 1)
        self.assertEqual(response.data["preference_count"], 1)
        self.assertEqual(response.data["pending_request_count"], 1)
        self.assertNotIn("review_queue_count", response.data)

    def test_admin_sees_review_queue(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("dashboard"))

        self.assertEqual(response.data["message"], "Welcome Alex, Role: ADMIN")
        self.assertEqual(response.data["job_count"], 0)
        self.assertEqual(response.data["review_queue_count"], 1)
