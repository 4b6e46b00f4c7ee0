import json
import unittest
from unittest.mock import MagicMock

from redis import exceptions as redis_exceptions

from backoffice.cache import InMemoryTagCache, RedisTagCache


class InMemoryTagCacheTests(unittest.TestCase):
    def test_invalidate_drops_entries(self):
        cache = InMemoryTagCache()
        cache.set("team", {"members": []})
        cache.set("blogs", {"blogs": []})
        cache.invalidate("team")
        self.assertIsNone(cache.get("team"))
        self.assertEqual(cache.get("blogs"), {"blogs": []})
        self.assertEqual(cache.invalidated, ["team"])


class RedisTagCacheTests(unittest.TestCase):
    def setUp(self):
        self.cache = RedisTagCache(url="redis://localhost:6379/0", ttl_seconds=60)
        self.cache.client = MagicMock()

    def test_set_stores_json_with_ttl(self):
        self.cache.set("team", {"members": [1]})
        self.cache.client.set.assert_called_once_with(
            "cache:team", json.dumps({"members": [1]}), ex=60
        )

    def test_get_decodes_json(self):
        self.cache.client.get.return_value = b'{"images": []}'
        self.assertEqual(self.cache.get("gallery-images"), {"images": []})
        self.cache.client.get.return_value = None
        self.assertIsNone(self.cache.get("gallery-images"))

    def test_unreadable_entry_is_a_miss(self):
        self.cache.client.get.return_value = b"{not json"
        with self.assertLogs("backoffice.cache", level="WARNING"):
            self.assertIsNone(self.cache.get("team"))

    def test_faults_are_treated_as_misses(self):
        self.cache.client.get.side_effect = redis_exceptions.ConnectionError("down")
        self.cache.client.delete.side_effect = redis_exceptions.ConnectionError("down")
        with self.assertLogs("backoffice.cache", level="WARNING"):
            self.assertIsNone(self.cache.get("team"))
            self.cache.invalidate("team", "blogs")


if __name__ == "__main__":
    unittest.main()
