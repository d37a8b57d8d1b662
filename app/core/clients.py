"""Provider client construction, done once per process in the app lifespan."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from anthropic import AsyncAnthropic
from fastapi import Request
from groq import AsyncGroq

from app.config import Settings
from app.integrations.blog_generation import BlogGenerator
from app.integrations.payments import StripeGateway
from app.integrations.transcription import TranscriptionService

logger = logging.getLogger(__name__)


@dataclass
class ProviderClients:
    http: httpx.AsyncClient
    groq: AsyncGroq
    anthropic: AsyncAnthropic | None
    transcription: TranscriptionService
    generator: BlogGenerator
    payments: StripeGateway

    async def close(self) -> None:
        await self.http.aclose()
        await self.groq.close()
        if self.anthropic is not None:
            await self.anthropic.close()


def build_clients(settings: Settings) -> ProviderClients:
    if settings.groq_api_key is None:
        raise ValueError("GROQ_API_KEY is not configured")
    if settings.stripe_secret_key is None or settings.stripe_webhook_secret is None:
        raise ValueError("STRIPE_SECRET_KEY and STRIPE_WEBHOOK_SECRET must be configured")

    http = httpx.AsyncClient(timeout=settings.file_fetch_timeout, follow_redirects=True)
    groq = AsyncGroq(api_key=settings.groq_api_key.get_secret_value())

    anthropic: AsyncAnthropic | None = None
    if settings.generation_provider == "anthropic":
        if settings.anthropic_api_key is None:
            raise ValueError("ANTHROPIC_API_KEY is required when GENERATION_PROVIDER=anthropic")
        anthropic = AsyncAnthropic(api_key=settings.anthropic_api_key.get_secret_value())
        generator = BlogGenerator.for_anthropic(anthropic, model=settings.anthropic_model)
    else:
        generator = BlogGenerator.for_groq(groq, model=settings.generation_model)

    logger.info(f"Provider clients ready (generation via {settings.generation_provider})")
    return ProviderClients(
        http=http,
        groq=groq,
        anthropic=anthropic,
        transcription=TranscriptionService(http, groq, model=settings.transcription_model),
        generator=generator,
        payments=StripeGateway(
            api_key=settings.stripe_secret_key.get_secret_value(),
            webhook_secret=settings.stripe_webhook_secret.get_secret_value(),
        ),
    )


def get_clients(request: Request) -> ProviderClients:
    return request.app.state.clients


def get_transcription_service(request: Request) -> TranscriptionService:
    return get_clients(request).transcription


def get_blog_generator(request: Request) -> BlogGenerator:
    return get_clients(request).generator


def get_payment_gateway(request: Request) -> StripeGateway:
    return get_clients(request).payments
