from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from order_notifications.adapters.config import (
    MailgunConfigError,
    load_env_file,
    mailgun_config_from_env,
)


class MailgunConfigTests(unittest.TestCase):
    @mock.patch.dict(
        os.environ,
        {"MAILGUN_API_KEY": " key-123 ", "MAILGUN_DOMAIN": "mg.example.com"},
        clear=True,
    )
    def test_defaults(self) -> None:
        config = mailgun_config_from_env()

        self.assertEqual(config["api_key"], "key-123")
        self.assertEqual(config["domain"], "mg.example.com")
        self.assertEqual(config["base_url"], "https://api.mailgun.net")
        self.assertEqual(config["timeout_seconds"], 10.0)
        self.assertEqual(config["from_name"], "Chem Revolutions")
        self.assertEqual(config["from_localpart"], "orders")

    @mock.patch.dict(
        os.environ,
        {
            "MAILGUN_API_KEY": "key-123",
            "MAILGUN_DOMAIN": "mg.example.com",
            "MAILGUN_API_BASE_URL": "https://api.eu.mailgun.net/",
            "MAILGUN_TIMEOUT_SECONDS": "3.5",
            "ORDER_EMAIL_FROM_NAME": "Lab Store",
            "ORDER_EMAIL_FROM_LOCALPART": "no-reply",
        },
        clear=True,
    )
    def test_overrides(self) -> None:
        config = mailgun_config_from_env()

        self.assertEqual(config["base_url"], "https://api.eu.mailgun.net")
        self.assertEqual(config["timeout_seconds"], 3.5)
        self.assertEqual(config["from_name"], "Lab Store")
        self.assertEqual(config["from_localpart"], "no-reply")

    @mock.patch.dict(os.environ, {"MAILGUN_API_KEY": "   "}, clear=True)
    def test_blank_and_missing_values_are_reported(self) -> None:
        with self.assertRaises(MailgunConfigError) as exc:
            mailgun_config_from_env()

        self.assertIn("MAILGUN_API_KEY", str(exc.exception))
        self.assertIn("MAILGUN_DOMAIN", str(exc.exception))

    @mock.patch.dict(
        os.environ,
        {
            "MAILGUN_API_KEY": "key-123",
            "MAILGUN_DOMAIN": "mg.example.com",
            "MAILGUN_TIMEOUT_SECONDS": "soon",
        },
        clear=True,
    )
    def test_malformed_timeout_is_a_config_error(self) -> None:
        with self.assertRaises(MailgunConfigError):
            mailgun_config_from_env()

    def test_load_env_file_sets_only_unset_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            env_path = Path(tmp) / ".env"
            env_path.write_text(
                "# local settings\n"
                "MAILGUN_DOMAIN=\"mg.example.com\"\n"
                "MAILGUN_API_KEY = 'key-from-file'\n"
                "not a pair\n"
                "=orphan\n",
                encoding="utf-8",
            )
            with mock.patch.dict(os.environ, {"MAILGUN_API_KEY": "key-from-env"}, clear=True):
                load_env_file(env_path)

                self.assertEqual(os.environ["MAILGUN_DOMAIN"], "mg.example.com")
                self.assertEqual(os.environ["MAILGUN_API_KEY"], "key-from-env")
                self.assertEqual(set(os.environ), {"MAILGUN_DOMAIN", "MAILGUN_API_KEY"})

    def test_load_env_file_ignores_missing_file(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            load_env_file(Path("/nonexistent/.env"))
            self.assertEqual(dict(os.environ), {})


if __name__ == "__main__":
    unittest.main()
