# src/web/routes/users.py
"""User targets API endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

import db
from stats import MAX_TARGET
from web.deps import get_current_user

router = APIRouter(prefix="/api/users", tags=["users"])


class TargetsOut(BaseModel):
    target_pushup: Optional[int] = None
    target_squat: Optional[int] = None
    target_situp: Optional[int] = None


class TargetsIn(BaseModel):
    target_pushup: int = Field(..., ge=1, le=MAX_TARGET)
    target_squat: int = Field(..., ge=1, le=MAX_TARGET)
    target_situp: int = Field(..., ge=1, le=MAX_TARGET)


@router.get("/me")
async def get_me(user=Depends(get_current_user)) -> Dict[str, Any]:
    """Verified identity of the caller plus what we store about them."""
    tg_user = user["user"]
    stored = await db.get_user(int(user["user_id"]))
    return {
        "user_id": tg_user.id,
        "first_name": tg_user.first_name,
        "username": tg_user.username,
        "registered": stored is not None,
    }


@router.get("/me/targets", response_model=TargetsOut)
async def get_my_targets(user=Depends(get_current_user)) -> TargetsOut:
    """Personal daily targets (unset targets are null)."""
    targets = await db.get_targets(int(user["user_id"]))
    return TargetsOut(**targets)


@router.put("/me/targets")
async def set_my_targets(payload: TargetsIn, user=Depends(get_current_user)) -> Dict[str, Any]:
    """Set all three targets, each between 1 and 9999."""
    tg_user = user["user"]
    await db.set_targets(
        int(user["user_id"]),
        tg_user.first_name,
        tg_user.username,
        target_pushup=payload.target_pushup,
        target_squat=payload.target_squat,
        target_situp=payload.target_situp,
    )
    return {"success": True}
