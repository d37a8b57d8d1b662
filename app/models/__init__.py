"""
SQLAlchemy models for the Speakeasy API.
"""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Integer, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class Post(Base):
    __tablename__ = "posts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)
    full_name = Column(Text)
    auth_user_id = Column(Text, index=True)
    customer_id = Column(Text, unique=True)
    subscription_id = Column(Text, index=True)
    price_id = Column(Text)
    status = Column(Text, default="inactive")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    amount = Column(Integer, nullable=False, default=0)
    status = Column(Text, nullable=False)
    stripe_payment_id = Column(Text, nullable=False, unique=True)
    price_id = Column(Text)
    user_email = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ProcessedWebhookEvent(Base):
    """Webhook events already applied to the store, keyed by provider event id."""

    __tablename__ = "processed_webhook_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Text, nullable=False, unique=True, index=True)
    event_type = Column(Text, nullable=False)
    processed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
