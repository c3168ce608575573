"""Cloud Functions for Firebase entrypoint.

Deploy with `firebase deploy --only functions`. `MAILGUN_API_KEY` is a Secret
Manager secret and `MAILGUN_DOMAIN` a plain param; both reach the function as
environment variables and are read per invocation by
`order_notifications.adapters.config`.
"""

from __future__ import annotations

import logging

from firebase_functions import firestore_fn, params

from order_notifications.adapters.firebase_runtime import handle_order_created

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")

MAILGUN_API_KEY = params.SecretParam("MAILGUN_API_KEY")
MAILGUN_DOMAIN = params.StringParam("MAILGUN_DOMAIN")


@firestore_fn.on_document_created(document="orders/{orderId}", secrets=[MAILGUN_API_KEY])
def send_order_confirmation(
    event: firestore_fn.Event[firestore_fn.DocumentSnapshot | None],
) -> None:
    handle_order_created(event)
