# src/stats.py
"""Aggregation of workout rows into totals, weekly series and group boards.

Pure functions: they take rows already fetched by `db` and return plain
dicts/lists ready for the API or the bot.
"""

from typing import Any, Iterable, Mapping, Optional

from config import DEFAULT_TARGET

WORKOUT_TYPES = ("pushup", "squat", "situp")

MAX_COUNT = 9999
MAX_TARGET = 9999


def empty_totals() -> dict[str, int]:
    return {t: 0 for t in WORKOUT_TYPES}


def totals_from_rows(rows: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    """Rows of (type, total) -> {"pushup": n, "squat": n, "situp": n}."""
    totals = empty_totals()
    for row in rows:
        wtype = row["type"]
        if wtype in totals:
            totals[wtype] += int(row["total"] or 0)
    return totals


def weekly_series(days: list[str], rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    One entry per day in `days` (same order) with per-type totals.
    Rows are (date, type, total); days with no rows get zeros.
    """
    by_day: dict[str, dict[str, int]] = {d: empty_totals() for d in days}
    for row in rows:
        day = by_day.get(row["date"])
        if day is None or row["type"] not in day:
            continue
        day[row["type"]] += int(row["total"] or 0)
    return [{"date": d, **by_day[d]} for d in days]


def _group_by_user(rows: Iterable[Mapping[str, Any]]) -> dict[int, dict[str, Any]]:
    users: dict[int, dict[str, Any]] = {}
    for row in rows:
        tid = int(row["telegram_id"])
        entry = users.get(tid)
        if entry is None:
            entry = {
                "name": row["first_name"],
                "telegram_id": tid,
                **empty_totals(),
                "targets": {
                    "pushup": row.get("target_pushup"),
                    "squat": row.get("target_squat"),
                    "situp": row.get("target_situp"),
                },
            }
            users[tid] = entry
        if row["type"] in WORKOUT_TYPES:
            entry[row["type"]] += int(row["total"] or 0)
    return users


def leaderboard(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Today's group board: per user counts and total.
    Rows are (telegram_id, first_name, type, total); users with nothing logged are dropped.
    """
    out = []
    for entry in _group_by_user(rows).values():
        total = sum(entry[t] for t in WORKOUT_TYPES)
        if total <= 0:
            continue
        out.append(
            {
                "name": entry["name"],
                "telegram_id": entry["telegram_id"],
                "pushup": entry["pushup"],
                "squat": entry["squat"],
                "situp": entry["situp"],
                "total": total,
            }
        )
    return out


def goals_progress(
    rows: Iterable[Mapping[str, Any]],
    default_target: int = DEFAULT_TARGET,
) -> list[dict[str, Any]]:
    """Per user done counts next to personal targets (unset target -> default_target)."""
    out = []
    for entry in _group_by_user(rows).values():
        targets = entry["targets"]
        out.append(
            {
                "name": entry["name"],
                "telegram_id": entry["telegram_id"],
                "pushup": entry["pushup"],
                "squat": entry["squat"],
                "situp": entry["situp"],
                "target_pushup": targets["pushup"] or default_target,
                "target_squat": targets["squat"] or default_target,
                "target_situp": targets["situp"] or default_target,
            }
        )
    return out


def percent(done: int, target: Optional[int]) -> int:
    """Progress towards a target, capped at 100."""
    if not target or target <= 0:
        return 100
    return min(100, round(done / target * 100))


def rank_by(entries: list[dict[str, Any]], key: str) -> list[dict[str, Any]]:
    """Entries with a positive `key`, highest first."""
    return sorted((e for e in entries if e.get(key, 0) > 0), key=lambda e: e[key], reverse=True)
