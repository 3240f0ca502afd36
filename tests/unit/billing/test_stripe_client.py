"""Unit tests for webhook signature verification."""

import pytest
import stripe

from assetflow.core.errors import ServiceUnavailableError
from assetflow.modules.billing.stripe_client import StripeClient
from factories.stripe_events import build_event, sign_payload


SECRET = "whsec_unit"


class TestConstructWebhookEvent:
    def test_valid_signature_returns_event(self):
        payload = build_event("customer.subscription.updated", {"id": "sub_1"})

        event = StripeClient.construct_webhook_event(
            payload, sign_payload(payload, SECRET), SECRET
        )

        assert event["type"] == "customer.subscription.updated"
        assert event["data"]["object"]["id"] == "sub_1"
        assert isinstance(event, dict)
        assert isinstance(event["data"]["object"], dict)

    def test_wrong_secret_rejected(self):
        payload = build_event("customer.subscription.updated", {"id": "sub_1"})

        with pytest.raises(stripe.SignatureVerificationError):
            StripeClient.construct_webhook_event(
                payload, sign_payload(payload, "whsec_other"), SECRET
            )

    def test_tampered_body_rejected(self):
        payload = build_event("customer.subscription.updated", {"id": "sub_1"})
        header = sign_payload(payload, SECRET)
        tampered = payload.replace(b"sub_1", b"sub_2")

        with pytest.raises(stripe.SignatureVerificationError):
            StripeClient.construct_webhook_event(tampered, header, SECRET)

    def test_stale_timestamp_rejected(self):
        payload = build_event("customer.subscription.updated", {"id": "sub_1"})
        header = sign_payload(payload, SECRET, timestamp=1_000_000)

        with pytest.raises(stripe.SignatureVerificationError):
            StripeClient.construct_webhook_event(payload, header, SECRET)

    def test_missing_header_rejected(self):
        payload = build_event("customer.subscription.updated", {"id": "sub_1"})

        with pytest.raises(stripe.SignatureVerificationError):
            StripeClient.construct_webhook_event(payload, "", SECRET)

    def test_signed_non_json_payload_rejected(self):
        payload = b"not json"

        with pytest.raises(ValueError):
            StripeClient.construct_webhook_event(
                payload, sign_payload(payload, SECRET), SECRET
            )


class TestConfiguration:
    async def test_unconfigured_client_refuses_calls(self):
        client = StripeClient()

        with pytest.raises(ServiceUnavailableError):
            await client.create_customer(email="a@acme.io")
