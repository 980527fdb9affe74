"""Tests for settings validation."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings


class TestSettings(unittest.TestCase):
    def test_rejects_non_postgres_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="sqlite:///app.db")

    def test_accepts_psycopg2_url(self) -> None:
        s = Settings(DATABASE_URL=" postgresql+psycopg2://u:p@db:5432/digital_seva ")
        self.assertEqual(s.DATABASE_URL, "postgresql+psycopg2://u:p@db:5432/digital_seva")

    def test_session_lifetime_defaults_to_seven_days(self) -> None:
        s = Settings(_env_file=None)
        self.assertEqual(s.SESSION_COOKIE_DAYS, 7)
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 7 * 24 * 60)
        self.assertEqual(s.LANG_COOKIE_DAYS, 365)

    def test_admin_emails_are_normalized(self) -> None:
        s = Settings(ADMIN_EMAILS=" Admin@Example.com, ,ops@example.com ")
        self.assertEqual(s.admin_emails, frozenset({"admin@example.com", "ops@example.com"}))

    def test_public_files_base_url_strips_trailing_slash(self) -> None:
        self.assertEqual(Settings(PUBLIC_FILES_BASE_URL="/files/").PUBLIC_FILES_BASE_URL, "/files")

    def test_supabase_url_must_be_http(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(SUPABASE_URL="ftp://project.supabase.co")
        self.assertIsNone(Settings(SUPABASE_URL="  ").SUPABASE_URL)

    def test_jwt_expiry_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=10081)

    def test_unknown_backends_are_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(STORAGE_BACKEND="s3")
        with self.assertRaises(ValidationError):
            Settings(IDENTITY_BACKEND="ldap")


if __name__ == "__main__":
    unittest.main()
