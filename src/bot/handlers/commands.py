# src/bot/handlers/commands.py
"""Command handlers for the Telegram bot.

Contains: /start, /help, /workout, /leaderboard, /goals, /stats, /streaks,
/scan, /setcommands, /setmenubutton.
"""

import logging

from telegram import Update
from telegram.constants import ChatType, ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

import db
from bot.keyboards import BOT_COMMANDS, app_menu_button, open_app_keyboard
from bot.services import scan_users_into_group
from bot.utils import (
    GROUP_ONLY_HINT,
    format_community_stats,
    format_goals,
    format_help,
    format_leaderboard,
)
from config import ADMIN_USER_ID
from stats import goals_progress, leaderboard
from time_utils import today_iso

logger = logging.getLogger(__name__)


def _is_private(update: Update) -> bool:
    return update.effective_chat.type == ChatType.PRIVATE


async def _reply(update: Update, text: str, **kwargs) -> None:
    await update.effective_message.reply_text(text, parse_mode=ParseMode.HTML, **kwargs)


async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/help and /start."""
    await _reply(update, format_help())


async def cmd_workout(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if _is_private(update):
        await _reply(update, "Let's get fit! 💪 Track your progress:", reply_markup=open_app_keyboard())
    else:
        # web_app buttons are not allowed in groups
        await _reply(update, "💪 To open the workout tracker tap the bot name at the top of the chat → <b>Open App</b>")


async def cmd_leaderboard(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/leaderboard, /top — today's group board per exercise."""
    if _is_private(update):
        await _reply(update, "🏋️ " + GROUP_ONLY_HINT.format(cmd="leaderboard"))
        return

    rows = await db.get_group_day_rows(update.effective_chat.id, today_iso())
    await _reply(update, format_leaderboard(leaderboard(rows)))


async def cmd_goals(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/goals, /progress — everyone's progress toward their targets today."""
    if _is_private(update):
        await _reply(update, "📊 " + GROUP_ONLY_HINT.format(cmd="goals"))
        return

    rows = await db.get_group_day_rows(update.effective_chat.id, today_iso())
    await _reply(update, format_goals(goals_progress(rows)))


async def cmd_stats(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/stats, /week — community total."""
    total = await db.get_global_total()
    await _reply(update, format_community_stats(total))


async def cmd_streaks(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _reply(update, "🔥 Streak tracking coming soon! Keep logging daily to build your streak.")


async def cmd_scan(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if _is_private(update):
        await _reply(update, "⚠️ Use /scan in a group chat to scan members into the leaderboard.")
        return

    chat = update.effective_chat
    await _reply(update, "✅ Scanning group members into the leaderboard...")
    await scan_users_into_group(context.bot, chat.id, chat.title)


async def cmd_setcommands(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Registers the bot command list (admin only when ADMIN_USER_ID is set)."""
    if ADMIN_USER_ID is not None and update.effective_user.id != ADMIN_USER_ID:
        await _reply(update, "This command is for the admin only.")
        return

    try:
        await context.bot.set_my_commands(BOT_COMMANDS)
    except TelegramError as e:
        logger.warning("setMyCommands failed: %s", e)
        await _reply(update, f"❌ Failed: {e.message}")
        return
    await _reply(update, "✅ Commands updated!")


async def cmd_setmenubutton(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/setmenubutton, /sendmenubutton — pins the mini app as this chat's menu button."""
    try:
        await context.bot.set_chat_menu_button(chat_id=update.effective_chat.id, menu_button=app_menu_button())
    except TelegramError as e:
        logger.warning("setChatMenuButton failed for %s: %s", update.effective_chat.id, e)
        await _reply(update, f"❌ Failed: {e.message}")
        return
    await _reply(update, "✅ Menu button set for this chat!")
