"""Stripe adapter: webhook verification and checkout session lookups."""
from __future__ import annotations

from typing import Any

import stripe


class StripeGateway:
    """Wraps the Stripe calls the webhook handler needs.

    The API key is passed per request so no module-level Stripe state is touched.
    """

    def __init__(self, api_key: str, webhook_secret: str):
        if not api_key:
            raise ValueError("STRIPE_SECRET_KEY is not configured")
        if not webhook_secret:
            raise ValueError("STRIPE_WEBHOOK_SECRET is not configured")
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def construct_event(self, payload: bytes, sig_header: str | None) -> stripe.Event:
        """Verify the signature and parse the event.

        Raises ``stripe.SignatureVerificationError`` or ``ValueError`` on bad input.
        """
        if not sig_header:
            raise stripe.SignatureVerificationError("Missing stripe-signature header", sig_header, payload)
        return stripe.Webhook.construct_event(payload, sig_header, self.webhook_secret, api_key=self.api_key)

    def retrieve_checkout_session(self, session_id: str) -> dict[str, Any]:
        """Checkout session with expanded line items, as plain nested dicts."""
        return self._fetch_checkout_session(session_id).to_dict()

    def _fetch_checkout_session(self, session_id: str) -> stripe.checkout.Session:
        return stripe.checkout.Session.retrieve(
            session_id,
            expand=["line_items"],
            api_key=self.api_key,
        )
