"""
Stripe webhook event handling.

Handled events:

- ``checkout.session.completed``: completes a donation, or activates the plan
  named in the session's ``plan_type`` metadata.
- ``customer.subscription.updated``: while the subscription is active the plan
  follows the price ``lookup_key``.
- ``customer.subscription.deleted``: the customer falls back to the free plan.

Everything else is acknowledged and ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bibliafs.core.database.repositories.bundle import RepoBundle

logger = logging.getLogger(__name__)


def _price_lookup_key(subscription: Mapping[str, Any]) -> Optional[str]:
    items = (subscription.get("items") or {}).get("data") or []
    if not items:
        return None
    price = items[0].get("price") or {}
    return price.get("lookup_key")


async def _checkout_completed(session: Mapping[str, Any], repos: RepoBundle) -> None:
    metadata = session.get("metadata") or {}
    if metadata.get("type") == "donation":
        donation = await repos.donations.mark_completed(session.get("id"))
        if donation is None:
            logger.warning(f"Completed checkout {session.get('id')} has no donation record")
        return

    plan_type = metadata.get("plan_type")
    user_id = metadata.get("user_id")
    if not plan_type or not user_id:
        return
    user = await repos.users.get_by_id(user_id)
    if user is None:
        logger.warning(f"Checkout completed for unknown user {user_id}")
        return
    await repos.users.set_plan(
        user, plan_type, subscription_id=session.get("subscription"), customer_id=session.get("customer")
    )
    logger.info(f"User {user_id} subscribed to plan {plan_type}")


async def _subscription_updated(subscription: Mapping[str, Any], repos: RepoBundle) -> None:
    if subscription.get("status") != "active":
        return
    plan = _price_lookup_key(subscription)
    customer_id = subscription.get("customer")
    if not plan or not customer_id:
        return
    user = await repos.users.get_by_stripe_customer(customer_id)
    if user is None:
        return
    await repos.users.set_plan(user, plan, subscription_id=subscription.get("id"))
    logger.info(f"User {user.id} plan updated to {plan}")


async def _subscription_deleted(subscription: Mapping[str, Any], repos: RepoBundle) -> None:
    customer_id = subscription.get("customer")
    if not customer_id:
        return
    user = await repos.users.get_by_stripe_customer(customer_id)
    if user is None:
        return
    await repos.users.set_plan(user, "free")
    logger.info(f"User {user.id} subscription ended, plan reset to free")


_HANDLERS = {
    "checkout.session.completed": _checkout_completed,
    "customer.subscription.updated": _subscription_updated,
    "customer.subscription.deleted": _subscription_deleted,
}


async def handle_stripe_event(event: Mapping[str, Any], repos: RepoBundle) -> bool:
    """Apply a Stripe event to the database.

    Args:
        event: A verified ``stripe.Event`` or the decoded JSON body
        repos: Repositories for the current request

    Returns:
        True if the event type is one this service reacts to
    """
    event_type = event.get("type")
    handler = _HANDLERS.get(event_type)
    if handler is None:
        logger.debug(f"Ignoring Stripe event {event_type}")
        return False
    payload = (event.get("data") or {}).get("object") or {}
    await handler(payload, repos)
    return True
