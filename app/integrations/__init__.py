"""External provider adapters."""

from .blog_generation import BlogGenerator, extract_title
from .payments import StripeGateway
from .transcription import TranscriptionService

__all__ = [
    "BlogGenerator",
    "StripeGateway",
    "TranscriptionService",
    "extract_title",
]
