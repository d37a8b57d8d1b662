from __future__ import annotations

from pydantic import BaseModel


class PlanSchema(BaseModel):
    id: str
    name: str
    description: str
    price: str
    items: list[str]
    payment_link: str
    price_id: str


class CurrentPlanSchema(BaseModel):
    status: str | None = None
    price_id: str | None = None
    plan: PlanSchema | None = None
