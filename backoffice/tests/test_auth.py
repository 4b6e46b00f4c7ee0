import time
import unittest

from jose import jwt

from backoffice.auth import (
    AdminUser,
    create_session_token,
    decode_session_token,
    verify_credentials,
)
from backoffice.config import Settings


class AuthTests(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(
            admin_username="Admin", admin_password="pw", secret_key="k"
        )

    def test_verify_credentials(self):
        self.assertTrue(verify_credentials(self.settings, "admin", "pw"))
        self.assertFalse(verify_credentials(self.settings, "admin", "PW"))
        self.assertFalse(verify_credentials(self.settings, "root", "pw"))

    def test_non_ascii_credentials_are_compared_not_rejected(self):
        self.assertFalse(verify_credentials(self.settings, "admin", "pässword"))
        self.assertFalse(verify_credentials(self.settings, "ädmin", "pw"))
        settings = Settings(admin_username="Jörg", admin_password="päss")
        self.assertTrue(verify_credentials(settings, "jörg", "päss"))

    def test_no_password_configured_never_matches(self):
        settings = Settings(admin_password=None)
        self.assertFalse(verify_credentials(settings, "admin", ""))

    def test_token_roundtrip(self):
        token = create_session_token(self.settings, AdminUser("Admin", "Boss"))
        user = decode_session_token(self.settings, token)
        self.assertEqual(user, AdminUser("Admin", "Boss"))

    def test_wrong_key_and_expired_tokens_are_rejected(self):
        token = create_session_token(self.settings, AdminUser("Admin", "Boss"))
        other = Settings(secret_key="other")
        self.assertIsNone(decode_session_token(other, token))

        expired = jwt.encode(
            {"sub": "Admin", "exp": int(time.time()) - 10}, "k", algorithm="HS256"
        )
        self.assertIsNone(decode_session_token(self.settings, expired))
        self.assertIsNone(decode_session_token(self.settings, ""))

    def test_token_without_subject(self):
        token = jwt.encode({"name": "x"}, "k", algorithm="HS256")
        self.assertIsNone(decode_session_token(self.settings, token))


if __name__ == "__main__":
    unittest.main()
