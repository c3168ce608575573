from __future__ import annotations

import io
import unittest
import urllib.error
import urllib.parse
from typing import Any
from unittest import mock

from order_notifications.adapters.fake_senders import send_email_via_console
from order_notifications.adapters.real_senders import MailgunSendError, send_email_via_mailgun


def make_config(**overrides: Any) -> dict[str, Any]:
    base: dict[str, Any] = {
        "api_key": "key-123",
        "domain": "sandbox.example.com",
        "base_url": "https://api.mailgun.net",
        "timeout_seconds": 5.0,
    }
    return base | overrides


def make_message() -> dict[str, str]:
    return {
        "from": "Chem Revolutions <orders@sandbox.example.com>",
        "to": "user@example.com",
        "subject": "Order Confirmation — order-1",
        "html": "<p>Hello</p>",
    }


class MailgunAdapterTests(unittest.TestCase):
    @mock.patch("order_notifications.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_via_mailgun_posts_html_message(self, urlopen_mock: mock.Mock) -> None:
        response = urlopen_mock.return_value.__enter__.return_value
        response.getcode.return_value = 200
        response.read.return_value = b'{"id":"<msg-id>","message":"Queued. Thank you."}'

        receipt = send_email_via_mailgun(make_message(), config=make_config())

        self.assertEqual(receipt, {"id": "<msg-id>", "message": "Queued. Thank you."})
        request_obj = urlopen_mock.call_args.args[0]
        self.assertEqual(
            request_obj.full_url, "https://api.mailgun.net/v3/sandbox.example.com/messages"
        )
        self.assertTrue((request_obj.get_header("Authorization") or "").startswith("Basic "))
        self.assertEqual(urlopen_mock.call_args.kwargs["timeout"], 5.0)

        payload = urllib.parse.parse_qs((request_obj.data or b"").decode("utf-8"))
        self.assertEqual(payload["to"][0], "user@example.com")
        self.assertEqual(payload["subject"][0], "Order Confirmation — order-1")
        self.assertEqual(payload["html"][0], "<p>Hello</p>")
        self.assertIn("orders@sandbox.example.com", payload["from"][0])

    @mock.patch("order_notifications.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_via_mailgun_uses_configured_base_url(
        self, urlopen_mock: mock.Mock
    ) -> None:
        response = urlopen_mock.return_value.__enter__.return_value
        response.getcode.return_value = 200
        response.read.return_value = b"{}"

        send_email_via_mailgun(
            make_message(), config=make_config(base_url="https://api.eu.mailgun.net")
        )

        request_obj = urlopen_mock.call_args.args[0]
        self.assertTrue(request_obj.full_url.startswith("https://api.eu.mailgun.net/v3/"))

    @mock.patch("order_notifications.adapters.real_senders.urllib.request.urlopen")
    def test_non_json_receipt_is_wrapped(self, urlopen_mock: mock.Mock) -> None:
        response = urlopen_mock.return_value.__enter__.return_value
        response.getcode.return_value = 200
        response.read.return_value = b"Queued"

        receipt = send_email_via_mailgun(make_message(), config=make_config())

        self.assertEqual(receipt, {"status": 200, "body": "Queued"})

    @mock.patch("order_notifications.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_via_mailgun_surfaces_http_error(self, urlopen_mock: mock.Mock) -> None:
        urlopen_mock.side_effect = urllib.error.HTTPError(
            url="https://api.mailgun.net/v3/sandbox.example.com/messages",
            code=401,
            msg="Unauthorized",
            hdrs=None,  # type: ignore[arg-type]
            fp=io.BytesIO(b'{"message":"Forbidden"}'),
        )

        with self.assertRaises(MailgunSendError) as exc:
            send_email_via_mailgun(make_message(), config=make_config())

        self.assertIn("HTTP 401", str(exc.exception))
        self.assertEqual(exc.exception.status, 401)

    @mock.patch("order_notifications.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_via_mailgun_surfaces_network_error(
        self, urlopen_mock: mock.Mock
    ) -> None:
        urlopen_mock.side_effect = urllib.error.URLError("connection refused")

        with self.assertRaises(MailgunSendError) as exc:
            send_email_via_mailgun(make_message(), config=make_config())

        self.assertIn("connection refused", str(exc.exception))
        self.assertIsNone(exc.exception.status)


class ConsoleSenderTests(unittest.TestCase):
    def test_console_sender_returns_receipt(self) -> None:
        with mock.patch("builtins.print") as print_mock:
            receipt = send_email_via_console(make_message(), config=make_config())

        self.assertTrue(receipt["id"].endswith("@sandbox.example.com>"))
        printed = [call.args[0] for call in print_mock.call_args_list]
        self.assertIn("to=user@example.com", printed)


if __name__ == "__main__":
    unittest.main()
