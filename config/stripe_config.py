import logging
from typing import Any, Dict
import stripe

logger = logging.getLogger(__name__)


class PaymentProcessor:
    """
    Thin wrapper around the Stripe SDK.

    Built once at startup from Settings and handed to the routes, so the
    secret key never lives in module-level globals.
    """

    def __init__(self, secret_key: str, currency: str = "usd"):
        self.secret_key = secret_key
        self.currency = currency

    def create_payment_intent(self, amount: int) -> str:
        """Create a payment intent for `amount` and return its client secret"""
        payment_intent = stripe.PaymentIntent.create(
            api_key=self.secret_key,
            amount=amount,
            currency=self.currency,
            automatic_payment_methods={
                "enabled": True,
                "allow_redirects": "never",
            },
        )
        logger.info(f"Created payment intent {payment_intent.id} for amount {amount}")
        return payment_intent.client_secret

    def retrieve_payment_intent(self, payment_intent_id: str) -> Dict[str, Any]:
        payment_intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=self.secret_key)
        last_error = payment_intent.last_payment_error
        return {
            "id": payment_intent.id,
            "status": payment_intent.status,
            "amount": payment_intent.amount,
            # Only meaningful while the intent has not succeeded
            "error": last_error.message if last_error and payment_intent.status != "succeeded" else None,
        }
