import unittest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from backoffice.storage import (
    InMemoryStorageClient,
    S3StorageClient,
    StorageError,
    generate_object_path,
)


class StorageTests(unittest.TestCase):
    def test_generate_object_path(self):
        path = generate_object_path("My Photo (1).JPG", "gallery/images")
        self.assertRegex(path, r"^gallery/images/\d{13}-[a-z0-9]{7}-My_Photo__1_\.JPG$")
        self.assertNotEqual(path, generate_object_path("My Photo (1).JPG", "gallery/images"))

    def test_path_from_url(self):
        storage = InMemoryStorageClient()
        url = storage.public_url("team/123-abc-x.png")
        self.assertEqual(storage.path_from_url(url), "team/123-abc-x.png")
        self.assertEqual(storage.path_from_url(url + "?v=2"), "team/123-abc-x.png")
        self.assertIsNone(storage.path_from_url("https://legacy.example.com/team/x.png"))
        self.assertIsNone(storage.path_from_url(""))

    def test_presigned_urls(self):
        storage = InMemoryStorageClient()
        self.assertIn("op=get", storage.presign_get("team/a.png", expires_in=60))
        self.assertIn("expires=60", storage.presign_get("team/a.png", expires_in=60))
        self.assertIn("op=put", storage.presign_put("team/a.png"))

    def test_in_memory_upload_and_delete(self):
        storage = InMemoryStorageClient()
        storage.upload_bytes("a/b.txt", b"hi", "text/plain")
        self.assertEqual(storage.get_bytes("a/b.txt"), b"hi")
        storage.delete("a/b.txt")
        self.assertEqual(storage.deleted_paths, ["a/b.txt"])
        with self.assertRaises(FileNotFoundError):
            storage.get_bytes("a/b.txt")


class S3StorageClientTests(unittest.TestCase):
    def setUp(self):
        self.client = S3StorageClient(
            bucket="site",
            region="us-east-1",
            endpoint="https://s3.example.com",
            access_key_id="key",
            secret_access_key="secret",
        )
        self.client._client = MagicMock()

    def test_default_public_base_url(self):
        self.assertEqual(
            self.client.public_url("team/a.png"), "https://s3.example.com/site/team/a.png"
        )
        self.assertEqual(
            self.client.path_from_url("https://s3.example.com/site/team/a.png"),
            "team/a.png",
        )

    def test_upload_passes_content_type(self):
        self.client.upload_bytes("team/a.png", b"x", "image/png")
        self.client._client.put_object.assert_called_once_with(
            Bucket="site", Key="team/a.png", Body=b"x", ContentType="image/png"
        )

    def test_client_errors_become_storage_errors(self):
        error = ClientError({"Error": {"Code": "500", "Message": "boom"}}, "DeleteObject")
        self.client._client.delete_object.side_effect = error
        with self.assertRaises(StorageError):
            self.client.delete("team/a.png")


if __name__ == "__main__":
    unittest.main()
