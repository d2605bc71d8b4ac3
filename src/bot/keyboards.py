# src/bot/keyboards.py
"""All keyboard / menu definitions for the Telegram bot."""

from telegram import (
    BotCommand,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    MenuButtonWebApp,
    WebAppInfo,
)

from config import WEBAPP_URL


def open_app_keyboard() -> InlineKeyboardMarkup:
    """Inline button that launches the mini app (private chats only)."""
    return InlineKeyboardMarkup(
        [
            [
                InlineKeyboardButton("Open Workout Tracker 🏋️", web_app=WebAppInfo(url=WEBAPP_URL)),
            ]
        ]
    )


def app_menu_button() -> MenuButtonWebApp:
    return MenuButtonWebApp(text="Workout Tracker 🏋️", web_app=WebAppInfo(url=WEBAPP_URL))


BOT_COMMANDS = [
    BotCommand("workout", "Open the workout tracker app"),
    BotCommand("leaderboard", "Today's top performers"),
    BotCommand("goals", "Everyone's progress toward goals"),
    BotCommand("stats", "Community total reps"),
    BotCommand("streaks", "Daily streak leaderboard"),
    BotCommand("scan", "Scan group members into the leaderboard"),
    BotCommand("help", "Show available commands"),
]
