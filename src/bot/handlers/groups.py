# src/bot/handlers/groups.py
"""Group events: keep group membership in sync with who is actually there."""

import logging

from telegram import Update
from telegram.constants import ChatMemberStatus
from telegram.ext import ContextTypes

from bot.services import auto_link_user, scan_users_into_group

logger = logging.getLogger(__name__)


async def on_group_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """
    Runs for every group message before command handlers.
    Links the sender and any newly joined members if they are app users.
    """
    message = update.effective_message
    chat = update.effective_chat
    if not message or not chat:
        return

    people = []
    if message.from_user and not message.from_user.is_bot:
        people.append(message.from_user)
    people.extend(m for m in (message.new_chat_members or ()) if not m.is_bot)

    for person in people:
        try:
            await auto_link_user(person.id, chat.id, chat.title)
        except Exception as e:
            # never block command handling because of membership bookkeeping
            logger.warning("auto-link failed for %s in %s: %s", person.id, chat.id, e)


async def on_my_chat_member(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Bot added to a group -> scan known users into it."""
    change = update.my_chat_member
    if not change:
        return

    new_status = change.new_chat_member.status
    if new_status not in (ChatMemberStatus.MEMBER, ChatMemberStatus.ADMINISTRATOR):
        return

    chat = change.chat
    logger.info("Bot joined chat %s (%s), scanning users", chat.id, chat.title)
    await scan_users_into_group(context.bot, chat.id, chat.title)
