# src/bot/utils.py
"""Pure text helpers for the Telegram bot.

These functions should NOT import Application, Update, or handlers.
They operate on data and return message text.
"""

import html
from typing import Any, Optional

from bot.keyboards import BOT_COMMANDS
from stats import percent, rank_by

MEDALS = ["🥇", "🥈", "🥉"]

SECTIONS = [
    ("💪 <b>Pushups</b>", "pushup"),
    ("🦵 <b>Squats</b>", "squat"),
    ("🔥 <b>Situps</b>", "situp"),
]

GROUP_ONLY_HINT = "Add me to a group chat and use <b>/{cmd}</b> there!"


def escape(text: Optional[str]) -> str:
    return html.escape(text or "", quote=False)


def progress_bar(pct: int) -> str:
    """10-cell bar plus percentage, e.g. '▓▓▓░░░░░░░ 30%'."""
    filled = round(pct / 10)
    return "▓" * filled + "░" * (10 - filled) + f" {pct}%"


def _section(title: str, key: str, board: list[dict[str, Any]]) -> str:
    ranked = rank_by(board, key)
    if not ranked:
        return f"{title}\n<i>No entries yet</i>"
    lines = [
        f"{MEDALS[i] if i < len(MEDALS) else f'{i + 1}.'} <b>{escape(e['name'])}</b> — {e[key]} reps"
        for i, e in enumerate(ranked)
    ]
    return title + "\n" + "\n".join(lines)


def format_leaderboard(board: list[dict[str, Any]]) -> str:
    if not board:
        return "No workouts logged today yet. Be the first! 💪"
    sections = "\n\n".join(_section(title, key, board) for title, key in SECTIONS)
    return "🏆 <b>Today's Leaderboard</b>\n\n" + sections


def format_goals(progress: list[dict[str, Any]]) -> str:
    if not progress:
        return "No workouts logged today yet. Start now! 🏃"

    blocks = []
    for u in progress:
        rows = [f"<b>{escape(u['name'])}</b>"]
        for emoji, label, key in (("💪", "Pushups", "pushup"), ("🦵", "Squats", "squat"), ("🔥", "Situps", "situp")):
            done, target = u[key], u[f"target_{key}"]
            rows.append(f"{emoji} {label}: {done}/{target} {progress_bar(percent(done, target))}")
        blocks.append("\n".join(rows))
    return "📊 <b>Today's Goals</b>\n\n" + "\n\n".join(blocks)


def format_community_stats(total: int) -> str:
    return (
        "📈 <b>Community Stats</b>\n\n"
        f"Total reps logged: <b>{total:,}</b>\n\n"
        "Tip: Log your reps in the mini app! 💪"
    )


def format_help() -> str:
    lines = [f"/{c.command} — {c.description}" for c in BOT_COMMANDS]
    return "👋 <b>Workout Tracker Bot</b>\n\nAvailable commands:\n" + "\n".join(lines)
