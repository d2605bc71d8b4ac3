from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

import db
from stats import goals_progress, leaderboard
from time_utils import today_iso
from web.deps import get_current_user


router = APIRouter(prefix="/api/groups", tags=["groups"])


class GroupOut(BaseModel):
    chat_id: int
    chat_title: Optional[str] = None
    joined_at: Optional[str] = None
    active_today: int = 0


class LeaderboardEntryOut(BaseModel):
    name: str
    telegram_id: int
    pushup: int
    squat: int
    situp: int
    total: int


class GoalsEntryOut(BaseModel):
    name: str
    telegram_id: int
    pushup: int
    squat: int
    situp: int
    target_pushup: int
    target_squat: int
    target_situp: int


@router.get("", response_model=list[GroupOut])
async def list_my_groups(user=Depends(get_current_user)):
    """Groups the user belongs to, with how many members logged reps today."""
    rows = await db.get_user_groups(int(user["user_id"]), today_iso())
    return [
        GroupOut(
            chat_id=int(r["chat_id"]),
            chat_title=r.get("chat_title"),
            joined_at=r["joined_at"].isoformat() if r.get("joined_at") is not None else None,
            active_today=int(r.get("active_today") or 0),
        )
        for r in rows
    ]


@router.get("/{chat_id}/leaderboard", response_model=list[LeaderboardEntryOut])
async def get_group_leaderboard(chat_id: int, user=Depends(get_current_user)):
    rows = await db.get_group_day_rows(chat_id, today_iso())
    return [LeaderboardEntryOut(**e) for e in leaderboard(rows)]


@router.get("/{chat_id}/goals", response_model=list[GoalsEntryOut])
async def get_group_goals(chat_id: int, user=Depends(get_current_user)):
    rows = await db.get_group_day_rows(chat_id, today_iso())
    return [GoalsEntryOut(**e) for e in goals_progress(rows)]
