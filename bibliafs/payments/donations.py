"""Donation amount rules (cents of BRL)."""

DONATION_PRESETS = (1000, 2500, 5000, 10000)
MIN_CUSTOM_AMOUNT = 100
MAX_CUSTOM_AMOUNT = 100_000_000
DEFAULT_DESTINATION = "app_operations"


def is_valid_donation_amount(amount: int) -> bool:
    if amount in DONATION_PRESETS:
        return True
    return MIN_CUSTOM_AMOUNT <= amount <= MAX_CUSTOM_AMOUNT
