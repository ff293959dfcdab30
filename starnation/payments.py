"""
Stripe checkout for creators and the post-redirect payment status check.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import stripe

from .config import get_payment_poll_settings, get_stripe_price_id, get_stripe_secret_key
from .errors import PaymentError
from .polling import PollResult, poll_until
from .utils import get_logger

logger = get_logger("payments")

USERS_TABLE = "users"


def _configure_stripe() -> None:
    api_key = get_stripe_secret_key()
    if not api_key:
        raise PaymentError("Payment system not configured.")
    stripe.api_key = api_key


def _find_or_create_user(supabase_client, username: str) -> dict:
    found = (
        supabase_client.table(USERS_TABLE)
        .select("*")
        .eq("username", username)
        .limit(1)
        .execute()
    )
    if found.data:
        return found.data[0]
    created = supabase_client.table(USERS_TABLE).insert({"username": username}).execute()
    if not created.data:
        raise PaymentError(f"Could not create user record for {username}")
    logger.info(f"Created user record for {username}")
    return created.data[0]


def _ensure_customer(supabase_client, user: dict, username: str) -> str:
    customer_id = user.get("stripe_customer_id")
    if customer_id:
        return customer_id
    customer = stripe.Customer.create(metadata={"supabase_user_id": str(user["id"]), "username": username})
    supabase_client.table(USERS_TABLE).update({"stripe_customer_id": customer.id}).eq("id", user["id"]).execute()
    logger.info(f"Created Stripe customer {customer.id} for {username}")
    return customer.id


def create_checkout_session(supabase_client, username: str, origin: str, price_id: Optional[str] = None) -> str:
    """
    Create a one-off Checkout session for `username`.

    Returns:
        The hosted checkout URL to redirect to
    """
    if not username or not username.strip():
        raise PaymentError("A creator name is required for checkout.")
    price_id = price_id or get_stripe_price_id()
    if not price_id:
        raise PaymentError("No price configured for checkout.")
    if supabase_client is None:
        raise PaymentError("User records are not configured.")
    _configure_stripe()

    origin = origin.rstrip("/")
    try:
        user = _find_or_create_user(supabase_client, username)
        customer_id = _ensure_customer(supabase_client, user, username)
        session = stripe.checkout.Session.create(
            customer=customer_id,
            line_items=[{"price": price_id, "quantity": 1}],
            mode="payment",
            success_url=f"{origin}?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{origin}?canceled=true",
            client_reference_id=str(user["id"]),
        )
    except stripe.StripeError as exc:
        logger.error(f"Stripe error creating checkout session: {exc}")
        raise PaymentError(getattr(exc, "user_message", None) or "Payment error.") from exc
    except PaymentError:
        raise
    except Exception as exc:
        logger.error(f"Checkout session failed for {username}: {exc}")
        raise PaymentError(str(exc)) from exc

    logger.info(f"Stripe session created: {session.id}")
    return session.url


def is_payment_confirmed(session_id: str) -> bool:
    """True when the Checkout session reports `payment_status == "paid"`."""
    _configure_stripe()
    try:
        session = stripe.checkout.Session.retrieve(session_id)
    except stripe.StripeError as exc:
        logger.warning(f"Payment status check failed for {session_id}: {exc}")
        return False
    return getattr(session, "payment_status", None) == "paid"


def wait_for_payment(
    session_id: str,
    interval: Optional[float] = None,
    max_attempts: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
    check: Callable[[str], bool] = is_payment_confirmed,
) -> PollResult:
    """
    Poll the payment status at a fixed interval with an attempt cap.

    Returns the PollResult whether or not the payment was confirmed.
    """
    default_interval, default_attempts = get_payment_poll_settings()
    return poll_until(
        refresh=lambda _previous: check(session_id),
        initial=False,
        is_done=bool,
        interval=interval or default_interval,
        max_attempts=max_attempts or default_attempts,
        sleep=sleep,
    )
