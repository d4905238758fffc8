from typing import Optional
import logging

from helpers.errors import InvalidAmountError

logger = logging.getLogger(__name__)


def resolve_payment_amount(amount: Optional[float], settings) -> int:
    """
    Amount to charge, in the smallest currency unit.

    Only whole, positive amounts are charged as given. Anything else (missing,
    non-positive, fractional) falls back to settings.default_payment_amount
    under the "default" policy and raises InvalidAmountError under "reject".
    """
    if amount is not None and amount > 0 and float(amount).is_integer():
        return int(amount)

    if settings.invalid_amount_policy == "reject":
        raise InvalidAmountError(f"Amount must be a positive integer, got {amount!r}")

    logger.warning(f"Invalid amount {amount!r} provided. Defaulting to {settings.default_payment_amount}.")
    return settings.default_payment_amount
