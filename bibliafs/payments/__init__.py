"""Stripe payments: donations, subscriptions and webhooks."""

from .donations import DONATION_PRESETS, is_valid_donation_amount
from .errors import PaymentsUnavailableError
from .gateway import PaymentGateway
from .webhooks import handle_stripe_event

__all__ = [
    "DONATION_PRESETS",
    "PaymentGateway",
    "PaymentsUnavailableError",
    "handle_stripe_event",
    "is_valid_donation_amount",
]
