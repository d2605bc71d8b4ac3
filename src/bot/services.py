# src/bot/services.py
"""Group membership services used by handlers.

These talk to Telegram / the DB but are not handlers themselves.
"""

import logging
from typing import Optional

from telegram import Bot
from telegram.error import TelegramError

import db

logger = logging.getLogger(__name__)

MEMBER_STATUSES = {"member", "administrator", "creator"}


async def auto_link_user(telegram_id: int, chat_id: int, chat_title: Optional[str] = None) -> bool:
    """
    Links a known app user to a group.
    Does nothing (returns False) if the user never opened the app.
    """
    if not await db.get_user(telegram_id):
        return False
    await db.upsert_membership(telegram_id, chat_id, chat_title)
    return True


async def scan_users_into_group(bot: Bot, chat_id: int, chat_title: Optional[str] = None) -> int:
    """
    Checks every known app user with getChatMember and links those
    who are in the group. Returns how many were linked.
    """
    linked = 0
    for telegram_id in await db.list_user_ids():
        try:
            member = await bot.get_chat_member(chat_id=chat_id, user_id=telegram_id)
        except TelegramError as e:
            # user_not_found etc. for people outside the group
            logger.debug("getChatMember failed for %s in %s: %s", telegram_id, chat_id, e)
            continue

        if member.status in MEMBER_STATUSES:
            await db.upsert_membership(telegram_id, chat_id, chat_title)
            linked += 1

    logger.info("Group scan %s: linked %d users", chat_id, linked)
    return linked
