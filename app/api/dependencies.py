"""Shared API dependencies."""
from app.core.clients import get_blog_generator, get_payment_gateway, get_transcription_service
from app.core.security import get_current_user

__all__ = [
    "get_blog_generator",
    "get_current_user",
    "get_payment_gateway",
    "get_transcription_service",
]
