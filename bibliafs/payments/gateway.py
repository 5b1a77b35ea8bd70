"""
Stripe gateway.

``PaymentGateway`` wraps a ``stripe.StripeClient``. The SDK is synchronous, so
every call is pushed to a worker thread with ``asyncio.to_thread``. Methods
return the Stripe objects as-is; routers read the fields they need.
"""

from __future__ import annotations

import asyncio
import json
import logging
from functools import partial
from typing import Any, Callable, Dict, List, Optional

import stripe

from bibliafs.core.database.entities.users import User
from bibliafs.core.database.repositories.users import UserRepository
from bibliafs.server.core.config import StripeConfig

from .donations import DEFAULT_DESTINATION
from .errors import PaymentsUnavailableError

logger = logging.getLogger(__name__)

CURRENCY = "brl"


class PaymentGateway:
    """Checkout, portal and subscription calls against Stripe."""

    def __init__(self, config: StripeConfig, client: Optional[stripe.StripeClient] = None) -> None:
        self._config = config
        if client is None and config.is_configured:
            client = stripe.StripeClient(config.secret_key)
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    @property
    def verifies_webhooks(self) -> bool:
        return bool(self._config.webhook_secret)

    @property
    def client(self) -> stripe.StripeClient:
        if self._client is None:
            raise PaymentsUnavailableError()
        return self._client

    async def _call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        return await asyncio.to_thread(partial(fn, *args, **kwargs))

    def _url(self, path: str) -> str:
        return f"{self._config.app_url.rstrip('/')}{path}"

    async def _create_customer(self, user: User, users: UserRepository) -> str:
        params: Dict[str, Any] = {"metadata": {"user_id": user.id}}
        if user.email:
            params["email"] = user.email
        name = " ".join(part for part in (user.first_name, user.last_name) if part)
        if name:
            params["name"] = name
        customer = await self._call(self.client.customers.create, params=params)
        user.stripe_customer_id = customer.id
        await users.update(user)
        logger.info(f"Created Stripe customer {customer.id} for user {user.id}")
        return customer.id

    async def ensure_customer(self, user: User, users: UserRepository) -> str:
        """Return the user's Stripe customer id, creating the customer when needed.

        A stored id that Stripe no longer knows (``resource_missing``) is replaced.
        """
        if user.stripe_customer_id:
            try:
                customer = await self._call(self.client.customers.retrieve, user.stripe_customer_id)
            except stripe.InvalidRequestError as e:
                if e.code != "resource_missing":
                    raise
                logger.warning(f"Stripe customer {user.stripe_customer_id} missing for user {user.id}, recreating")
            else:
                if not getattr(customer, "deleted", False):
                    return customer.id
        return await self._create_customer(user, users)

    async def create_donation_checkout(
        self,
        *,
        customer_id: str,
        user_id: str,
        amount: int,
        recurring: bool,
        destination: Optional[str] = None,
        is_anonymous: bool = False,
        message: Optional[str] = None,
    ) -> Any:
        price_data: Dict[str, Any] = {
            "currency": CURRENCY,
            "unit_amount": amount,
            "product_data": {"name": "Doação BíbliaFS"},
        }
        if recurring:
            price_data["recurring"] = {"interval": "month"}

        params = {
            "customer": customer_id,
            "mode": "subscription" if recurring else "payment",
            "line_items": [{"price_data": price_data, "quantity": 1}],
            "success_url": self._url("/donate?success=true&session_id={CHECKOUT_SESSION_ID}"),
            "cancel_url": self._url("/donate?canceled=true"),
            "metadata": {
                "user_id": user_id,
                "type": "donation",
                "destination": destination or DEFAULT_DESTINATION,
                "is_anonymous": str(bool(is_anonymous)).lower(),
                "message": message or "",
            },
        }
        return await self._call(self.client.checkout.sessions.create, params=params)

    async def create_subscription_checkout(
        self, *, customer_id: str, user_id: str, price_id: str, plan_type: str
    ) -> Any:
        params = {
            "customer": customer_id,
            "mode": "subscription",
            "line_items": [{"price": price_id, "quantity": 1}],
            "success_url": self._url("/pricing?success=true&session_id={CHECKOUT_SESSION_ID}"),
            "cancel_url": self._url("/pricing?canceled=true"),
            "metadata": {"user_id": user_id, "plan_type": plan_type},
        }
        return await self._call(self.client.checkout.sessions.create, params=params)

    async def create_portal_session(self, customer_id: str) -> Any:
        params = {"customer": customer_id, "return_url": self._url("/profile")}
        return await self._call(self.client.billing_portal.sessions.create, params=params)

    async def cancel_subscription(self, subscription_id: str) -> Any:
        logger.info(f"Cancelling Stripe subscription {subscription_id}")
        return await self._call(self.client.subscriptions.cancel, subscription_id)

    async def create_payment_intent(self, amount: int, customer_id: Optional[str] = None) -> Any:
        params: Dict[str, Any] = {"amount": amount, "currency": CURRENCY}
        if customer_id:
            params["customer"] = customer_id
        return await self._call(self.client.payment_intents.create, params=params)

    async def list_payment_methods(self, customer_id: str) -> List[Any]:
        result = await self._call(
            self.client.payment_methods.list, params={"customer": customer_id, "type": "card"}
        )
        return list(result.data)

    def construct_event(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """Verify a webhook payload and return the event as a plain dict.

        Raises:
            stripe.SignatureVerificationError: If the signature does not match
            ValueError: If the payload is not valid JSON
        """
        if not self._config.webhook_secret:
            raise PaymentsUnavailableError("Stripe webhook secret is not configured")
        stripe.Webhook.construct_event(payload, signature, self._config.webhook_secret)
        return json.loads(payload)
