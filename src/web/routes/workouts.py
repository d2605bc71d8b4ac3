from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator

import db
from stats import MAX_COUNT, totals_from_rows, weekly_series
from time_utils import is_iso_date, last_n_days, today_iso
from web.deps import get_current_user


router = APIRouter(prefix="/api/workouts", tags=["workouts"])

WorkoutType = Literal["pushup", "squat", "situp"]


class WorkoutCreateIn(BaseModel):
    type: WorkoutType
    count: int = Field(..., gt=0, le=MAX_COUNT)
    # YYYY-MM-DD; server date (UTC) when omitted
    date: Optional[str] = None
    # None = solo mode, otherwise the group chat the app was opened from
    chat_id: Optional[int] = Field(None, ge=-2**63, le=2**63 - 1)

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_iso_date(v):
            raise ValueError("date must be YYYY-MM-DD")
        return v


class WorkoutPatchIn(BaseModel):
    count: int = Field(..., ge=0, le=MAX_COUNT)


class TotalsOut(BaseModel):
    pushup: int = 0
    squat: int = 0
    situp: int = 0


class DayTotalsOut(TotalsOut):
    date: str


class WorkoutOut(BaseModel):
    id: int
    type: str
    count: int
    date: str
    chat_id: Optional[int] = None
    created_at: Optional[str] = None


def _row_to_out(row: Dict[str, Any]) -> WorkoutOut:
    created = row.get("created_at")
    return WorkoutOut(
        id=int(row["id"]),
        type=row["type"],
        count=int(row["count"]),
        date=row["date"],
        chat_id=row.get("chat_id"),
        created_at=created.isoformat() if created is not None else None,
    )


async def _owned_workout(workout_id: int, user_id: int) -> Dict[str, Any]:
    """Loads a workout and checks it belongs to the authenticated user."""
    if not await db.get_user(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    workout = await db.get_workout(workout_id)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    if int(workout["telegram_id"]) != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return workout


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_workout(payload: WorkoutCreateIn, user=Depends(get_current_user)) -> Dict[str, Any]:
    """
    Logs reps for the authenticated user.
    Creates the user on first use and joins the group when chat_id is given.
    """
    user_id = int(user["user_id"])
    tg_user = user["user"]

    await db.upsert_user(user_id, tg_user.first_name, tg_user.username)
    if payload.chat_id is not None:
        await db.upsert_membership(user_id, payload.chat_id)

    workout_id = await db.add_workout(
        user_id,
        payload.type,
        payload.count,
        payload.date or today_iso(),
        chat_id=payload.chat_id,
    )
    return {"success": True, "workout_id": workout_id}


@router.get("/stats", response_model=TotalsOut)
async def get_my_stats(user=Depends(get_current_user)) -> TotalsOut:
    """All-time totals per exercise."""
    rows = await db.get_type_totals(int(user["user_id"]))
    return TotalsOut(**totals_from_rows(rows))


@router.get("/today", response_model=TotalsOut)
async def get_my_today_stats(user=Depends(get_current_user)) -> TotalsOut:
    rows = await db.get_type_totals(int(user["user_id"]), date=today_iso())
    return TotalsOut(**totals_from_rows(rows))


@router.get("/weekly", response_model=list[DayTotalsOut])
async def get_my_weekly_stats(user=Depends(get_current_user)):
    """Last 7 days, oldest first, for the progress chart."""
    days = last_n_days(7)
    rows = await db.get_daily_type_totals(int(user["user_id"]), days)
    return [DayTotalsOut(**day) for day in weekly_series(days, rows)]


@router.get("/recent", response_model=list[WorkoutOut])
async def get_recent_workouts(user=Depends(get_current_user)):
    rows = await db.get_recent_workouts(int(user["user_id"]), limit=10)
    return [_row_to_out(r) for r in rows]


@router.get("/global")
async def get_global_stats() -> Dict[str, Any]:
    """Community total, public."""
    return {"total_count": await db.get_global_total()}


@router.patch("/{workout_id}")
async def edit_workout(workout_id: int, payload: WorkoutPatchIn, user=Depends(get_current_user)) -> Dict[str, Any]:
    await _owned_workout(workout_id, int(user["user_id"]))
    await db.update_workout_count(workout_id, payload.count)
    return {"success": True}


@router.delete("/{workout_id}")
async def delete_workout(workout_id: int, user=Depends(get_current_user)) -> Dict[str, Any]:
    await _owned_workout(workout_id, int(user["user_id"]))
    await db.delete_workout(workout_id)
    return {"success": True}
