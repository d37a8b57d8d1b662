from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user
from app.database import get_db
from app.models import User
from app.plans import get_plans, plan_for_price_id
from app.schemas.plan import CurrentPlanSchema, PlanSchema

router = APIRouter()


@router.get("/", response_model=List[PlanSchema])
async def list_plans() -> List[PlanSchema]:
    return get_plans()


@router.get("/current", response_model=CurrentPlanSchema)
async def current_plan(
    db: Session = Depends(get_db),
    user: Dict[str, Any] = Depends(get_current_user),
) -> CurrentPlanSchema:
    """Plan of the signed-in subscriber, derived from their stored Stripe price."""
    subscriber = db.query(User).filter(User.auth_user_id == user["id"]).first()
    if not subscriber:
        raise HTTPException(status_code=404, detail="No subscription found")
    return CurrentPlanSchema(
        status=subscriber.status,
        price_id=subscriber.price_id,
        plan=plan_for_price_id(subscriber.price_id),
    )
