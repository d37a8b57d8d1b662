"""
Payment webhook processing: Stripe events to user/payment store mutations.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.integrations.payments import StripeGateway
from app.models import Payment, ProcessedWebhookEvent, User

logger = logging.getLogger(__name__)

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
SUBSCRIPTION_DELETED = "customer.subscription.deleted"


def _first_price_id(session: Mapping[str, Any]) -> str | None:
    line_items = session.get("line_items") or {}
    items = line_items.get("data") or []
    if not items:
        return None
    price = items[0].get("price") or {}
    return price.get("id")


def _ref_id(value: Any) -> str | None:
    # Stripe returns either a bare id or an expanded object.
    if value is None or isinstance(value, str):
        return value
    return value.get("id")


def is_event_processed(db: Session, event_id: str) -> bool:
    return (
        db.query(ProcessedWebhookEvent.id)
        .filter(ProcessedWebhookEvent.event_id == event_id)
        .first()
        is not None
    )


def upsert_subscriber(
    db: Session,
    *,
    email: str,
    full_name: str | None,
    customer_id: str | None,
    auth_user_id: str | None,
    subscription_id: str | None,
    price_id: str | None,
) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(email=email)
        db.add(user)
    if full_name:
        user.full_name = full_name
    if customer_id:
        user.customer_id = customer_id
    if auth_user_id:
        user.auth_user_id = auth_user_id
    if subscription_id:
        user.subscription_id = subscription_id
    user.price_id = price_id
    user.status = "active"
    return user


def record_payment(
    db: Session,
    *,
    stripe_payment_id: str,
    amount: int,
    status: str,
    price_id: str | None,
    user_email: str,
) -> bool:
    exists = db.query(Payment.id).filter(Payment.stripe_payment_id == stripe_payment_id).first()
    if exists is not None:
        return False
    db.add(
        Payment(
            stripe_payment_id=stripe_payment_id,
            amount=amount,
            status=status,
            price_id=price_id,
            user_email=user_email,
        )
    )
    return True


def mark_subscription_canceled(db: Session, subscription_id: str) -> int:
    updated = (
        db.query(User)
        .filter(User.subscription_id == subscription_id)
        .update({User.status: "canceled"}, synchronize_session=False)
    )
    if not updated:
        logger.warning(f"No subscriber found for canceled subscription {subscription_id}")
    return updated


def handle_checkout_session_completed(db: Session, session: Mapping[str, Any]) -> None:
    customer_details = session.get("customer_details") or {}
    email = customer_details.get("email")
    if not email:
        raise ValidationError(f"Checkout session {session.get('id')} has no customer email")

    price_id = _first_price_id(session)
    upsert_subscriber(
        db,
        email=email,
        full_name=customer_details.get("name"),
        customer_id=_ref_id(session.get("customer")),
        auth_user_id=session.get("client_reference_id"),
        subscription_id=_ref_id(session.get("subscription")),
        price_id=price_id,
    )
    record_payment(
        db,
        stripe_payment_id=_ref_id(session.get("payment_intent")) or session["id"],
        amount=session.get("amount_total") or 0,
        status=session.get("payment_status") or session.get("status") or "complete",
        price_id=price_id,
        user_email=email,
    )


def process_webhook_event(db: Session, gateway: StripeGateway, event: Mapping[str, Any]) -> bool:
    """Apply a verified event to the store.

    Returns False when the event id was already processed. The ledger row is
    committed together with the mutation it guards.
    """
    event_id = event["id"]
    event_type = event["type"]

    if is_event_processed(db, event_id):
        logger.info(f"Webhook event {event_id} ({event_type}) already processed, skipping")
        return False

    try:
        if event_type == CHECKOUT_SESSION_COMPLETED:
            session = gateway.retrieve_checkout_session(event["data"]["object"]["id"])
            logger.info(f"Webhook received: {event_type} for session {session.get('id')}")
            handle_checkout_session_completed(db, session)
        elif event_type == SUBSCRIPTION_DELETED:
            subscription_id = event["data"]["object"]["id"]
            logger.info(f"Webhook received: {event_type} for subscription {subscription_id}")
            mark_subscription_canceled(db, subscription_id)
        else:
            logger.info(f"Unhandled event type {event_type}")

        db.add(ProcessedWebhookEvent(event_id=event_id, event_type=event_type))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Webhook handled: {event_type}")
    return True
