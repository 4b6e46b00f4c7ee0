import os
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from backoffice.app import create_app
from backoffice.config import Settings, get_settings
from backoffice.dependencies import get_order_store, get_storage_client, reset_backends


def png(name="photo.png"):
    return (name, b"\x89PNG", "image/png")


class BackofficeApiTestCase(unittest.TestCase):
    def setUp(self):
        env = patch.dict(os.environ, {"USE_IN_MEMORY_BACKENDS": "true"})
        env.start()
        self.addCleanup(env.stop)
        get_settings.cache_clear()
        self.addCleanup(get_settings.cache_clear)
        reset_backends()
        self.settings = Settings(
            admin_username="admin",
            admin_password="s3cret",
            secret_key="test-secret",
            use_in_memory_backends=True,
        )
        app = create_app()
        app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(app)

    def tearDown(self):
        reset_backends()

    def login(self):
        response = self.client.post(
            "/api/auth/login", json={"username": "Admin", "password": "s3cret"}
        )
        self.assertEqual(response.status_code, 200)
        return response


class AuthTests(BackofficeApiTestCase):
    def test_admin_routes_require_session(self):
        self.assertEqual(self.client.get("/api/admin/authors").status_code, 401)
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

    def test_bad_credentials(self):
        response = self.client.post(
            "/api/auth/login", json={"username": "admin", "password": "nope"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Invalid credentials")

    def test_login_sets_cookie_and_logout_clears_it(self):
        response = self.login()
        self.assertIn("token=", response.headers["set-cookie"])
        self.assertIn("httponly", response.headers["set-cookie"].lower())
        self.assertEqual(response.json(), {"username": "admin", "name": "Administrator"})

        me = self.client.get("/api/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["username"], "admin")

        self.client.post("/api/auth/logout")
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

    def test_tampered_cookie_is_rejected(self):
        self.client.cookies.set("token", "not-a-jwt")
        self.assertEqual(self.client.get("/api/admin/team").status_code, 401)


class GalleryApiTests(BackofficeApiTestCase):
    def setUp(self):
        super().setUp()
        self.login()

    def _create_images(self, count):
        response = self.client.post(
            "/api/admin/gallery/images",
            json={
                "images": [
                    {"image_url": f"https://cdn.test/{i}.jpg", "alt": f"Image {i}"}
                    for i in range(count)
                ]
            },
        )
        self.assertEqual(response.status_code, 201)
        return response.json()["images"]

    def _home_ids(self):
        response = self.client.get("/api/home/gallery-images")
        self.assertEqual(response.status_code, 200)
        return [image["id"] for image in response.json()["images"]]

    def test_reorder_updates_public_listing(self):
        self._create_images(3)
        self.assertEqual(self._home_ids(), [3, 2, 1])

        response = self.client.put(
            "/api/admin/gallery/images/order", json={"ids": [1, 3]}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"namespace": "gallery:images:order", "ids": ["1", "3"]}
        )
        self.assertEqual(self._home_ids(), [1, 3, 2])

        current = self.client.get("/api/admin/gallery/images/order")
        self.assertEqual(current.json()["ids"], ["1", "3"])

    def test_append_to_order(self):
        self._create_images(2)
        response = self.client.post("/api/admin/gallery/images/order/1")
        self.assertEqual(response.json()["ids"], ["1"])
        self.assertEqual(self._home_ids(), [1, 2])
        missing = self.client.post("/api/admin/gallery/images/order/99")
        self.assertEqual(missing.status_code, 404)

    def test_bulk_delete_prunes_order(self):
        self._create_images(3)
        self.client.put("/api/admin/gallery/images/order", json={"ids": [2, 1, 3]})
        response = self.client.post(
            "/api/admin/gallery/images/delete", json={"ids": [1, 2]}
        )
        self.assertEqual(response.json(), {"deleted": 2})
        self.assertEqual(get_order_store().get_order("gallery:images:order"), ["3"])
        self.assertEqual(self._home_ids(), [3])

    def test_validation_error_maps_to_400(self):
        response = self.client.post(
            "/api/admin/gallery/images",
            json={"images": [{"image_url": "https://cdn.test/a.jpg", "alt": "x" * 201}]},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["detail"],
            "Image 1: Alt text must be less than 200 characters",
        )

    def test_upload_and_update_image(self):
        response = self.client.post(
            "/api/admin/gallery/images/upload",
            data={"alt": "Office"},
            files={"image": png()},
        )
        self.assertEqual(response.status_code, 201)
        image = response.json()
        self.assertIn("/gallery/images/", image["image_url"])

        updated = self.client.put(
            f"/api/admin/gallery/images/{image['id']}", data={"alt": "New office"}
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["alt"], "New office")
        self.assertEqual(updated.json()["image_url"], image["image_url"])

        deleted = self.client.delete(f"/api/admin/gallery/images/{image['id']}")
        self.assertEqual(deleted.json(), {"status": "ok"})
        storage = get_storage_client()
        self.assertEqual(storage.stored_objects, {})

    def test_videos(self):
        response = self.client.post(
            "/api/admin/gallery/videos",
            json={"videos": [{"video_url": "https://cdn.test/v.mp4", "alt": "Reel"}]},
        )
        self.assertEqual(response.status_code, 201)
        listed = self.client.get("/api/home/gallery-videos").json()["videos"]
        self.assertEqual([v["alt"] for v in listed], ["Reel"])

    def test_missing_image_is_404(self):
        self.assertEqual(self.client.get("/api/admin/gallery/images/5").status_code, 404)
        self.assertEqual(
            self.client.delete("/api/admin/gallery/images/5").status_code, 404
        )


class TeamApiTests(BackofficeApiTestCase):
    def setUp(self):
        super().setUp()
        self.login()

    def _create(self, name):
        response = self.client.post(
            "/api/admin/team",
            data={"name": name, "title": "Designer", "bio": "Draws."},
            files={"image": png()},
        )
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_create_and_public_profile(self):
        member = self._create("Jo Park")
        self.assertEqual(member["slug"], "jo-park")
        profile = self.client.get("/api/team/jo-park")
        self.assertEqual(profile.status_code, 200)
        self.assertEqual(profile.json()["name"], "Jo Park")
        self.assertEqual(self.client.get("/api/team/nobody").status_code, 404)

    def test_missing_fields(self):
        response = self.client.post("/api/admin/team", data={"name": "Jo"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["detail"],
            "Missing required fields: job title, biography, profile image",
        )

    def test_bulk_update_and_order(self):
        a = self._create("A")
        b = self._create("B")
        response = self.client.patch(
            "/api/admin/team",
            json={"members": [{"id": a["id"], "name": "A2", "title": "Lead", "bio": "Leads."}]},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["members"][0]["name"], "A2")

        self.client.put("/api/admin/team/order", json={"ids": [a["id"], b["id"]]})
        names = [m["name"] for m in self.client.get("/api/home/team").json()["members"]]
        self.assertEqual(names, ["A2", "B"])

        response = self.client.post("/api/admin/team/delete", json={"ids": [a["id"]]})
        self.assertEqual(response.json(), {"deleted": 1})
        self.assertEqual(get_order_store().get_order("team:order"), [str(b["id"])])


class BlogApiTests(BackofficeApiTestCase):
    def setUp(self):
        super().setUp()
        self.login()
        response = self.client.post(
            "/api/admin/authors",
            data={"name": "Ana", "email": "ana@example.com"},
            files={"avatar": png("ana.png")},
        )
        self.assertEqual(response.status_code, 201)
        self.author = response.json()

    def _create_blog(self, title, published):
        response = self.client.post(
            "/api/admin/blogs",
            data={
                "title": title,
                "content": "Body text",
                "author_id": str(self.author["id"]),
                "is_published": "true" if published else "false",
                "keywords": '["news"]',
            },
        )
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_public_listing_only_shows_published(self):
        draft = self._create_blog("Draft", False)
        live = self._create_blog("Live", True)
        self.assertEqual(live["author"]["name"], "Ana")
        self.assertEqual(live["keywords"], ["news"])

        public = self.client.get("/api/blogs").json()["blogs"]
        self.assertEqual([b["title"] for b in public], ["Live"])
        self.assertEqual(self.client.get(f"/api/blogs/{draft['id']}").status_code, 404)
        self.assertEqual(self.client.get(f"/api/blogs/{live['id']}").status_code, 200)

        count = self.client.get("/api/admin/blogs/count")
        self.assertEqual(count.json(), {"count": 2})

    def test_publishing_invalidates_public_cache(self):
        draft = self._create_blog("Draft", False)
        self.assertEqual(self.client.get("/api/blogs").json()["blogs"], [])
        response = self.client.put(
            f"/api/admin/blogs/{draft['id']}",
            data={
                "title": "Draft",
                "content": "Body text",
                "author_id": str(self.author["id"]),
                "is_published": "on",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["is_published"])
        self.assertEqual(len(self.client.get("/api/blogs").json()["blogs"]), 1)

    def test_author_with_posts_cannot_be_deleted(self):
        blog = self._create_blog("Post", True)
        response = self.client.delete(f"/api/admin/authors/{self.author['id']}")
        self.assertEqual(response.status_code, 400)
        self.client.delete(f"/api/admin/blogs/{blog['id']}")
        response = self.client.delete(f"/api/admin/authors/{self.author['id']}")
        self.assertEqual(response.status_code, 200)

    def test_blog_requires_author(self):
        response = self.client.post(
            "/api/admin/blogs", data={"title": "T", "content": "C"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["detail"], "Title, content, and author are required"
        )


class TestimonialAndUploadApiTests(BackofficeApiTestCase):
    def setUp(self):
        super().setUp()
        self.login()

    def test_testimonial_crud(self):
        payload = {
            "name": "Dana",
            "address": "Lisbon",
            "company": "Acme",
            "content": "Fantastic collaboration.",
            "rating": 5,
        }
        created = self.client.post("/api/admin/testimonials", json=payload)
        self.assertEqual(created.status_code, 201)
        home = self.client.get("/api/home/testimonials").json()["testimonials"]
        self.assertEqual([t["name"] for t in home], ["Dana"])

        bad = self.client.put(
            f"/api/admin/testimonials/{created.json()['id']}",
            json={**payload, "rating": 9},
        )
        self.assertEqual(bad.status_code, 400)
        self.assertEqual(bad.json()["detail"], "Rating must be between 1 and 5")

    def test_testimonial_order_disabled_by_default(self):
        response = self.client.put("/api/admin/testimonials/order", json={"ids": [1]})
        self.assertEqual(response.status_code, 400)

    def test_presign(self):
        response = self.client.get(
            "/api/admin/uploads/presign",
            params={"folder": "gallery/images", "filename": "my photo.jpg"},
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertTrue(payload["path"].startswith("gallery/images/"))
        self.assertTrue(payload["path"].endswith("-my_photo.jpg"))
        self.assertTrue(payload["public_url"].endswith(payload["path"]))

        unknown = self.client.get(
            "/api/admin/uploads/presign",
            params={"folder": "../etc", "filename": "x"},
        )
        self.assertEqual(unknown.status_code, 400)


if __name__ == "__main__":
    unittest.main()
