"""
Payments Endpoints.

Donations and plan subscriptions through Stripe Checkout, the billing portal
and the Stripe webhook. Every route that talks to Stripe answers 503 when no
Stripe key is configured.
"""

import json
from typing import Any, Dict, List

import stripe
from fastapi import APIRouter, HTTPException, Request, status

from bibliafs.core.database.entities.donations import Donation, DonationType
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.payments import (
    CheckoutSessionResponse,
    DonationCheckoutRequest,
    DonationCreate,
    PaymentIntentRequest,
    SubscriptionCheckoutRequest,
    SubscriptionStatus,
)
from bibliafs.payments import handle_stripe_event, is_valid_donation_amount
from bibliafs.payments.donations import DEFAULT_DESTINATION
from bibliafs.server.auth import CurrentUser, OptionalUser
from bibliafs.server.services.deps import PaymentGatewayDep, RepoBundleDep

logger = get_logger(__name__)
router = APIRouter(tags=["payments"])


def _check_amount(amount: int) -> None:
    if not is_valid_donation_amount(amount):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid amount")


# =====================================================================
# Donations
# =====================================================================


@router.post(
    "/donations/checkout",
    response_model=CheckoutSessionResponse,
    summary="Donation Checkout",
    description="Start a Checkout Session for a one-time or monthly donation and record it as pending.",
    responses={400: {"description": "Invalid amount"}, 503: {"description": "Payments not configured"}},
)
async def donation_checkout(
    body: DonationCheckoutRequest, user: CurrentUser, repos: RepoBundleDep, gateway: PaymentGatewayDep
) -> CheckoutSessionResponse:
    _check_amount(body.amount)
    recurring = body.type == DonationType.RECURRING.value
    customer_id = await gateway.ensure_customer(user, repos.users)
    session = await gateway.create_donation_checkout(
        customer_id=customer_id,
        user_id=user.id,
        amount=body.amount,
        recurring=recurring,
        destination=body.destination,
        is_anonymous=body.is_anonymous,
        message=body.message,
    )
    await repos.donations.create(
        Donation(
            user_id=user.id,
            amount=body.amount,
            type=DonationType.RECURRING.value if recurring else DonationType.ONE_TIME.value,
            destination=body.destination or DEFAULT_DESTINATION,
            is_anonymous=body.is_anonymous,
            message=body.message,
            stripe_payment_id=session.id,
        )
    )
    logger.info(f"Donation checkout {session.id} created for user {user.id}: {body.amount} cents")
    return CheckoutSessionResponse(url=session.url, session_id=session.id)


@router.post(
    "/create-payment-intent",
    summary="Create Payment Intent",
    responses={400: {"description": "Invalid amount"}, 503: {"description": "Payments not configured"}},
)
async def create_payment_intent(
    body: PaymentIntentRequest, user: CurrentUser, gateway: PaymentGatewayDep
) -> Dict[str, Any]:
    _check_amount(body.amount)
    intent = await gateway.create_payment_intent(body.amount, user.stripe_customer_id)
    return {"client_secret": intent.client_secret}


@router.get(
    "/stripe/payment-methods",
    summary="Saved Cards",
    description="Card payment methods of the user's Stripe customer; empty without a customer.",
)
async def payment_methods(user: CurrentUser, gateway: PaymentGatewayDep) -> List[Dict[str, Any]]:
    if not user.stripe_customer_id:
        return []
    methods = await gateway.list_payment_methods(user.stripe_customer_id)
    return [
        {
            "id": method.id,
            "brand": method.card.brand if method.card else None,
            "last4": method.card.last4 if method.card else None,
            "exp_month": method.card.exp_month if method.card else None,
            "exp_year": method.card.exp_year if method.card else None,
        }
        for method in methods
    ]


@router.get("/donations", response_model=List[Donation], summary="My Donations")
async def list_donations(user: CurrentUser, repos: RepoBundleDep) -> List[Donation]:
    return await repos.donations.list_for_user(user.id)


@router.post(
    "/donations",
    response_model=Donation,
    status_code=status.HTTP_201_CREATED,
    summary="Record Donation",
    responses={400: {"description": "Invalid amount"}},
)
async def create_donation(body: DonationCreate, user: CurrentUser, repos: RepoBundleDep) -> Donation:
    _check_amount(body.amount)
    values = body.model_dump()
    values["destination"] = values.get("destination") or DEFAULT_DESTINATION
    return await repos.donations.create(Donation(user_id=user.id, **values))


# =====================================================================
# Subscriptions
# =====================================================================


@router.post(
    "/subscriptions/checkout",
    response_model=CheckoutSessionResponse,
    summary="Subscription Checkout",
    responses={400: {"description": "Price or plan missing"}, 503: {"description": "Payments not configured"}},
)
async def subscription_checkout(
    body: SubscriptionCheckoutRequest, user: CurrentUser, repos: RepoBundleDep, gateway: PaymentGatewayDep
) -> CheckoutSessionResponse:
    if not body.price_id or not body.plan_type:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="price_id and plan_type are required")
    customer_id = await gateway.ensure_customer(user, repos.users)
    session = await gateway.create_subscription_checkout(
        customer_id=customer_id, user_id=user.id, price_id=body.price_id, plan_type=body.plan_type
    )
    return CheckoutSessionResponse(url=session.url, session_id=session.id)


@router.post(
    "/subscriptions/portal",
    summary="Billing Portal",
    responses={400: {"description": "No Stripe customer"}, 503: {"description": "Payments not configured"}},
)
async def billing_portal(user: CurrentUser, gateway: PaymentGatewayDep) -> Dict[str, Any]:
    if not user.stripe_customer_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No billing account found")
    session = await gateway.create_portal_session(user.stripe_customer_id)
    return {"url": session.url}


@router.post(
    "/subscriptions/cancel",
    response_model=SubscriptionStatus,
    summary="Cancel Subscription",
    responses={400: {"description": "No active subscription"}, 503: {"description": "Payments not configured"}},
)
async def cancel_subscription(
    user: CurrentUser, repos: RepoBundleDep, gateway: PaymentGatewayDep
) -> SubscriptionStatus:
    if not user.stripe_subscription_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No active subscription")
    await gateway.cancel_subscription(user.stripe_subscription_id)
    user = await repos.users.set_plan(user, "free")
    return _subscription_status(user)


def _subscription_status(user) -> SubscriptionStatus:
    return SubscriptionStatus(
        plan=user.subscription_plan,
        stripe_customer_id=user.stripe_customer_id,
        stripe_subscription_id=user.stripe_subscription_id,
        ai_requests_count=user.ai_requests_count,
        ai_requests_reset_at=user.ai_requests_reset_at,
    )


@router.get(
    "/subscriptions/status",
    response_model=SubscriptionStatus,
    summary="Subscription Status",
    description="Plan and AI usage of the caller. Anonymous callers get the free plan.",
)
async def subscription_status(user: OptionalUser) -> SubscriptionStatus:
    if user is None:
        return SubscriptionStatus(plan="free")
    return _subscription_status(user)


# =====================================================================
# Webhook
# =====================================================================


@router.post(
    "/webhooks/stripe",
    summary="Stripe Webhook",
    description="Stripe events. With a webhook secret configured, only correctly signed events are accepted.",
    responses={400: {"description": "Invalid signature or payload"}},
)
async def stripe_webhook(request: Request, repos: RepoBundleDep, gateway: PaymentGatewayDep) -> Dict[str, Any]:
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    try:
        if gateway.verifies_webhooks:
            if not signature:
                raise ValueError("missing stripe-signature header")
            event = gateway.construct_event(payload, signature)
        else:
            event = json.loads(payload)
    except (stripe.SignatureVerificationError, ValueError) as e:
        logger.warning(f"Rejected Stripe webhook: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid webhook payload")
    if not isinstance(event, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid webhook payload")

    await handle_stripe_event(event, repos)
    return {"received": True}
