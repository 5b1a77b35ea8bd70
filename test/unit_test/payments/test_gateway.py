"""Unit tests for the Stripe gateway with a stand-in Stripe client."""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
import stripe

from bibliafs.payments import PaymentGateway, PaymentsUnavailableError, is_valid_donation_amount
from bibliafs.server.core.config import StripeConfig

CONFIG = StripeConfig(secret_key="sk_test", app_url="http://app.test/")


class FakeResource:
    """Records calls and replays a canned result (or raises a canned error)."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.result = result
        self.error = error

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append({"args": args, **kwargs})
        if self.error is not None:
            raise self.error
        return self.result


def _fake_client(**overrides: FakeResource) -> SimpleNamespace:
    resources = {
        "customers_create": FakeResource(SimpleNamespace(id="cus_new")),
        "customers_retrieve": FakeResource(SimpleNamespace(id="cus_old", deleted=False)),
        "sessions_create": FakeResource(SimpleNamespace(id="cs_1", url="https://checkout.test/cs_1")),
        "portal_create": FakeResource(SimpleNamespace(url="https://billing.test")),
        "subscriptions_cancel": FakeResource(SimpleNamespace(id="sub_1", status="canceled")),
    }
    resources.update(overrides)
    return SimpleNamespace(
        resources=resources,
        customers=SimpleNamespace(create=resources["customers_create"], retrieve=resources["customers_retrieve"]),
        checkout=SimpleNamespace(sessions=SimpleNamespace(create=resources["sessions_create"])),
        billing_portal=SimpleNamespace(sessions=SimpleNamespace(create=resources["portal_create"])),
        subscriptions=SimpleNamespace(cancel=resources["subscriptions_cancel"]),
    )


class TestConfiguration:
    def test_unconfigured_gateway_raises_on_use(self):
        gateway = PaymentGateway(StripeConfig())

        assert gateway.is_configured is False
        with pytest.raises(PaymentsUnavailableError):
            gateway.client

    def test_webhook_verification_needs_secret(self):
        assert PaymentGateway(CONFIG, client=_fake_client()).verifies_webhooks is False
        assert PaymentGateway(StripeConfig(secret_key="sk", webhook_secret="whsec")).verifies_webhooks is True

    def test_construct_event_returns_a_plain_dict(self):
        payload = json.dumps({"id": "evt_1", "object": "event", "type": "invoice.paid", "data": {"object": {}}})
        timestamp = int(time.time())
        digest = hmac.new(b"whsec", f"{timestamp}.{payload}".encode(), hashlib.sha256).hexdigest()
        gateway = PaymentGateway(StripeConfig(secret_key="sk", webhook_secret="whsec"), client=_fake_client())

        event = gateway.construct_event(payload.encode(), f"t={timestamp},v1={digest}")

        assert type(event) is dict
        assert event["data"].get("object") == {}

    def test_construct_event_rejects_a_bad_signature(self):
        gateway = PaymentGateway(StripeConfig(secret_key="sk", webhook_secret="whsec"), client=_fake_client())

        with pytest.raises(stripe.SignatureVerificationError):
            gateway.construct_event(b'{"type": "invoice.paid"}', f"t={int(time.time())},v1=deadbeef")


class TestCustomers:
    async def test_creates_customer_and_stores_id(self, repos, make_user):
        user = await make_user("u1", first_name="Ana", last_name="Lima")
        client = _fake_client()

        customer_id = await PaymentGateway(CONFIG, client=client).ensure_customer(user, repos.users)

        assert customer_id == "cus_new"
        params = client.resources["customers_create"].calls[0]["params"]
        assert params == {"metadata": {"user_id": "u1"}, "email": "u1@example.com", "name": "Ana Lima"}
        assert (await repos.users.get_by_id("u1")).stripe_customer_id == "cus_new"

    async def test_existing_customer_is_reused(self, repos, make_user):
        user = await make_user("u1", stripe_customer_id="cus_old")
        client = _fake_client()

        assert await PaymentGateway(CONFIG, client=client).ensure_customer(user, repos.users) == "cus_old"
        assert client.resources["customers_create"].calls == []

    async def test_missing_customer_is_recreated(self, repos, make_user):
        user = await make_user("u1", stripe_customer_id="cus_gone")
        missing = stripe.InvalidRequestError("No such customer", "id", code="resource_missing")
        client = _fake_client(customers_retrieve=FakeResource(error=missing))

        assert await PaymentGateway(CONFIG, client=client).ensure_customer(user, repos.users) == "cus_new"


class TestCheckout:
    async def test_recurring_donation_checkout(self):
        client = _fake_client()

        session = await PaymentGateway(CONFIG, client=client).create_donation_checkout(
            customer_id="cus_1", user_id="u1", amount=2500, recurring=True, is_anonymous=True
        )

        assert session.id == "cs_1"
        params = client.resources["sessions_create"].calls[0]["params"]
        assert params["mode"] == "subscription"
        assert params["line_items"][0]["price_data"]["recurring"] == {"interval": "month"}
        assert params["metadata"]["type"] == "donation"
        assert params["metadata"]["is_anonymous"] == "true"
        assert params["cancel_url"] == "http://app.test/donate?canceled=true"

    async def test_subscription_checkout_metadata(self):
        client = _fake_client()

        await PaymentGateway(CONFIG, client=client).create_subscription_checkout(
            customer_id="cus_1", user_id="u1", price_id="price_123", plan_type="monthly"
        )

        params = client.resources["sessions_create"].calls[0]["params"]
        assert params["line_items"] == [{"price": "price_123", "quantity": 1}]
        assert params["metadata"] == {"user_id": "u1", "plan_type": "monthly"}


@pytest.mark.parametrize(
    "amount,valid",
    [(1000, True), (2500, True), (100, True), (99, False), (0, False), (100_000_000, True), (100_000_001, False)],
)
def test_donation_amounts(amount, valid):
    assert is_valid_donation_amount(amount) is valid
