import unittest

from backoffice.db import ContentKind, SqlContentStore


class SqlContentStoreTests(unittest.TestCase):
    """
    Runs the SQLAlchemy store against in-memory SQLite.
    """

    def setUp(self):
        self.db = SqlContentStore("sqlite+pysqlite:///:memory:")

    def _image(self, url):
        return self.db.create(ContentKind.GALLERY_IMAGES, {"image_url": url, "alt": ""})

    def test_create_and_get(self):
        image = self._image("https://cdn.test/a.jpg")
        self.assertEqual(image.id, 1)
        fetched = self.db.get(ContentKind.GALLERY_IMAGES, image.id)
        self.assertEqual(fetched.image_url, "https://cdn.test/a.jpg")
        self.assertIsNone(self.db.get(ContentKind.GALLERY_IMAGES, 99))

    def test_list_is_newest_first(self):
        for name in ("a", "b", "c"):
            self._image(f"https://cdn.test/{name}.jpg")
        listed = self.db.list_by_created_desc(ContentKind.GALLERY_IMAGES)
        self.assertEqual([i.id for i in listed], [3, 2, 1])

    def test_get_many_keeps_requested_order(self):
        for name in ("a", "b", "c"):
            self._image(f"https://cdn.test/{name}.jpg")
        fetched = self.db.get_many(ContentKind.GALLERY_IMAGES, [3, 7, 1, 3])
        self.assertEqual([i.id for i in fetched], [3, 1])
        self.assertEqual(self.db.get_many(ContentKind.GALLERY_IMAGES, []), [])

    def test_update_delete_and_count(self):
        image = self._image("https://cdn.test/a.jpg")
        updated = self.db.update(ContentKind.GALLERY_IMAGES, image.id, {"alt": "A"})
        self.assertEqual(updated.alt, "A")
        self.assertIsNone(self.db.update(ContentKind.GALLERY_IMAGES, 42, {"alt": "x"}))

        self._image("https://cdn.test/b.jpg")
        self.assertEqual(self.db.count(ContentKind.GALLERY_IMAGES), 2)
        self.assertTrue(self.db.delete(ContentKind.GALLERY_IMAGES, image.id))
        self.assertFalse(self.db.delete(ContentKind.GALLERY_IMAGES, image.id))
        self.assertEqual(self.db.delete_many(ContentKind.GALLERY_IMAGES, [2, 5]), 1)
        self.assertEqual(self.db.count(ContentKind.GALLERY_IMAGES), 0)

    def test_blog_keywords_roundtrip(self):
        author = self.db.create(
            ContentKind.AUTHORS,
            {"name": "Ana", "email": None, "avatar_url": "https://cdn.test/ana.png"},
        )
        blog = self.db.create(
            ContentKind.BLOGS,
            {
                "title": "Hello",
                "content": "Body",
                "author_id": author.id,
                "is_published": True,
                "keywords": ["a", "b"],
            },
        )
        fetched = self.db.get(ContentKind.BLOGS, blog.id)
        self.assertEqual(fetched.keywords, ["a", "b"])
        self.assertTrue(fetched.is_published)
        self.assertIsNone(fetched.updated_at)

    def test_testimonials_table(self):
        record = self.db.create(
            ContentKind.TESTIMONIALS,
            {
                "name": "Dana",
                "address": "Lisbon",
                "company": "Acme",
                "content": "Fantastic collaboration.",
                "rating": 4.5,
            },
        )
        self.assertEqual(record.as_dict()["rating"], 4.5)


if __name__ == "__main__":
    unittest.main()
