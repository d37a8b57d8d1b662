"""Subscription plans offered through Stripe payment links."""
from __future__ import annotations

from app.config import Settings, settings
from app.schemas.plan import PlanSchema


def get_plans(config: Settings = settings) -> list[PlanSchema]:
    return [
        PlanSchema(
            id="basic",
            name="Basic",
            description="Get started with SpeakEasy!",
            price=config.basic_plan_price,
            items=["3 Blog Posts", "3 Transcription"],
            payment_link=config.basic_plan_payment_link,
            price_id=config.basic_plan_price_id,
        ),
        PlanSchema(
            id="pro",
            name="Pro",
            description="All Blog Posts, let's go!",
            price=config.pro_plan_price,
            items=["Unlimited Blog Posts", "Unlimited Transcriptions"],
            payment_link=config.pro_plan_payment_link,
            price_id=config.pro_plan_price_id,
        ),
    ]


def plan_for_price_id(price_id: str | None, config: Settings = settings) -> PlanSchema | None:
    if not price_id:
        return None
    for plan in get_plans(config):
        if plan.price_id and plan.price_id == price_id:
            return plan
    return None
