# grocery/services/payment_gateway.py
import json
from typing import Any, Dict, List

import stripe

from grocery.domain.errors import PaymentGatewayError, PaymentSignatureError
from grocery.utils.settings import STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET, CURRENCY
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

# maksymalny wiek podpisu webhooka w sekundach
SIGNATURE_TOLERANCE = 300


class StripeGateway:
    """
    Cienka warstwa nad SDK Stripe.
    -sesja checkout
    -jednorazowy kupon
    -weryfikacja podpisu webhooka
    """

    def __init__(self, api_key: str | None = None, webhook_secret: str | None = None):
        self.api_key = api_key or STRIPE_SECRET_KEY
        self.webhook_secret = webhook_secret or STRIPE_WEBHOOK_SECRET

    def create_checkout_session(
        self,
        line_items: List[Dict[str, Any]],
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
        discounts: List[Dict[str, str]] | None = None,
    ) -> Dict[str, str]:
        params: Dict[str, Any] = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": line_items,
            "metadata": metadata,
            # metadata takze na payment intent, zeby charge.succeeded je niosl
            "payment_intent_data": {"metadata": metadata},
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        if discounts:
            params["discounts"] = discounts

        logger.info(f"Creating checkout session for order {metadata.get('order_id')}")
        try:
            session = stripe.checkout.Session.create(api_key=self.api_key, **params)
        except stripe.StripeError as e:
            logger.error(f"Stripe checkout session failed: {e}")
            raise PaymentGatewayError("Failed to create checkout session") from e

        return {"id": session.id, "url": session.url}

    def create_coupon(
        self,
        amount_off: int | None = None,
        percent_off: float | None = None,
        currency: str = CURRENCY,
    ) -> Dict[str, str]:
        if (amount_off is None) == (percent_off is None):
            raise ValueError("Exactly one of amount_off or percent_off is required")

        params: Dict[str, Any] = {"duration": "once"}
        if amount_off is not None:
            params.update(amount_off=amount_off, currency=currency)
        else:
            params["percent_off"] = percent_off

        try:
            coupon = stripe.Coupon.create(api_key=self.api_key, **params)
        except stripe.StripeError as e:
            logger.error(f"Stripe coupon creation failed: {e}")
            raise PaymentGatewayError("Failed to create coupon") from e

        return {"id": coupon.id}

    def verify_event(self, payload: bytes, signature: str | None) -> Dict[str, Any]:
        if not signature:
            raise PaymentSignatureError("Missing Stripe-Signature header")
        if not self.webhook_secret:
            raise PaymentSignatureError("Webhook signing secret is not configured")

        try:
            text = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                text, signature, self.webhook_secret, SIGNATURE_TOLERANCE
            )
            return json.loads(text)
        except stripe.SignatureVerificationError as e:
            logger.warning(f"Webhook signature verification failed: {e}")
            raise PaymentSignatureError(f"Webhook Error: {e}") from e
        except ValueError as e:
            # UnicodeDecodeError i JSONDecodeError dziedzicza po ValueError
            raise PaymentSignatureError("Webhook Error: invalid payload") from e
