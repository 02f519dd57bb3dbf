from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import User
from courses.models import CourseModule, ModuleAsset


class CourseModuleApiTests(APITestCase):

    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            username="admin@example.com", email="admin@example.com",
            password="Secret123!", role=User.ADMIN,
        )
        self.seeker = User.objects.create_user(
            username="seeker@example.com", email="seeker@example.com",
            password="Secret123!", role=User.JOB_SEEKER,
        )
        self.intro = CourseModule.objects.create(title="Intro to Care", category="Nursing")
        self.safety = CourseModule.objects.create(
            title="Workplace Safety", category="General", visibility="private"
        )
        self.legacy = CourseModule.objects.create(
            title="Legacy Systems", category="General", is_archived=True
        )

    def _titles(self, response) -> set:
        return {row["title"] for row in response.data}

    def test_admin_creates_module(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("course-module-list"),
            {"title": "Customer Service", "category": "Retail"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["assets"], [])
        self.assertFalse(response.data["is_archived"])

    def test_title_and_category_required(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("course-module-list"), {"title": "Untitled"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data["category"][0]), "Title and Category are required.")

    def test_non_admin_cannot_create(self) -> None:
        self.client.force_authenticate(self.seeker)

        response = self.client.post(
            reverse("course-module-list"), {"title": "X", "category": "Y"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_archived_hidden_from_non_admins(self) -> None:
        self.client.force_authenticate(self.seeker)

        listing = self.client.get(reverse("course-module-list"))
        detail = self.client.get(reverse("course-module-detail", args=[self.legacy.pk]))
        explicit = self.client.get(reverse("course-module-list"), {"archived": "only"})

        self.assertEqual(self._titles(listing), {"Intro to Care", "Workplace Safety"})
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self._titles(explicit), {"Legacy Systems"})

    def test_admin_sees_archived(self) -> None:
        self.client.force_authenticate(self.admin)

        listing = self.client.get(reverse("course-module-list"))
        active = self.client.get(reverse("course-module-list"), {"archived": "active"})
        detail = self.client.get(reverse("course-module-detail", args=[self.legacy.pk]))

        self.assertEqual(len(listing.data), 3)
        self.assertEqual(self._titles(active), {"Intro to Care", "Workplace Safety"})
        self.assertEqual(detail.status_code, status.HTTP_200_OK)

    def test_list_filters(self) -> None:
        self.client.force_authenticate(self.seeker)

        by_category = self.client.get(reverse("course-module-list"), {"category": "Nursing"})
        by_search = self.client.get(reverse("course-module-list"), {"search": "SAFE"})
        by_visibility = self.client.get(reverse("course-module-list"), {"visibility": "private"})

        self.assertEqual(self._titles(by_category), {"Intro to Care"})
        self.assertEqual(self._titles(by_search), {"Workplace Safety"})
        self.assertEqual(self._titles(by_visibility), {"Workplace Safety"})

    def test_assets(self) -> None:
        self.client.force_authenticate(self.admin)
        url = reverse("course-module-assets", args=[self.intro.pk])

        missing_url = self.client.post(url, {"type": "video", "title": "Demo"}, format="json")
        self.assertEqual(missing_url.status_code, status.HTTP_400_BAD_REQUEST)

        missing_title = self.client.post(url, {"type": "text"}, format="json")
        self.assertEqual(missing_title.status_code, status.HTTP_400_BAD_REQUEST)

        created = self.client.post(
            url,
            {"type": "video", "title": "Demo", "url": "https://videos.example.com/demo.mp4"},
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        self.assertEqual(created.data["message"], "Asset uploaded")

        asset_id = created.data["asset"]["id"]
        delete_url = reverse("course-module-delete-asset", args=[self.intro.pk, asset_id])
        self.assertEqual(self.client.delete(delete_url).data, {"message": "Asset removed"})
        self.assertFalse(ModuleAsset.objects.filter(pk=asset_id).exists())
        self.assertEqual(self.client.delete(delete_url).status_code, status.HTTP_404_NOT_FOUND)

    def test_text_asset_keeps_content(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("course-module-assets", args=[self.intro.pk]),
            {"type": "text", "title": "Notes", "text": "Wash hands."},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.intro.assets.get().text, "Wash hands.")
        self.assertEqual(
            set(response.data["asset"]),
            {"id", "type", "title", "text", "url", "created_at"},
        )

    def test_unknown_module(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("course-module-detail", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Module not found")

    def test_bulk_archive_and_unarchive(self) -> None:
        self.client.force_authenticate(self.admin)
        url = reverse("course-module-bulk-archive")

        response = self.client.patch(
            url, {"ids": [self.intro.pk, self.legacy.pk]}, format="json"
        )
        self.assertEqual(response.data["matched"], 2)
        self.assertEqual(response.data["modified"], 1)
        self.assertEqual(response.data["message"], "Courses archived successfully")

        response = self.client.patch(
            url, {"ids": [self.intro.pk], "is_archived": False}, format="json"
        )
        self.assertEqual(response.data["message"], "Courses unarchived successfully")
        self.intro.refresh_from_db()
        self.assertFalse(self.intro.is_archived)

    def test_bulk_delete(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("course-module-bulk-delete"),
            {"ids": [self.intro.pk, self.safety.pk]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(list(CourseModule.objects.values_list("title", flat=True)), ["Legacy Systems"])

        response = self.client.post(reverse("course-module-bulk-delete"), {"ids": []}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
