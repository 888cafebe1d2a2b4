import logging
import math

import stripe
from fastapi import APIRouter, HTTPException

from config import get_settings
from schemas import PaymentIntentRequest
from .auth import CurrentUserDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])

CURRENCY = "usd"


@router.post("/create-payment-intent")
def create_payment_intent(payment: PaymentIntentRequest, current: CurrentUserDep):
    """
    Create a Stripe payment intent for the donation and hand back
    its client secret. Nothing is stored.
    """
    amount = payment.donationAmount
    if not amount or not math.isfinite(amount) or amount < 0:
        raise HTTPException(status_code=400, detail="Invalid donation amount")

    amount_cents = int(round(amount * 100))

    try:
        intent = stripe.PaymentIntent.create(
            amount=amount_cents,
            currency=CURRENCY,
            payment_method_types=["card"],
            api_key=get_settings().stripe_secret_key,
        )
    except stripe.StripeError as exc:
        logger.warning("Stripe refused payment intent for %s: %s", current["email"], exc)
        raise HTTPException(status_code=502, detail=exc.user_message or "Payment gateway error")

    logger.info("Payment intent %s created for %s", intent.id, current["email"])
    return {"clientSecret": intent.client_secret}
