# src/main.py
"""
Main bot entry point.
Sets up logging, the database, registers handlers and starts polling.

The HTTP API for the mini app is a separate process: `uvicorn web.app:app`.
"""

import asyncio
import logging
import time

from telegram import Update
from telegram.ext import (
    ApplicationBuilder,
    ChatMemberHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

import db
from config import TELEGRAM_BOT_TOKEN

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
# Library noise
logging.getLogger("httpx").setLevel(logging.WARNING)

# --- Handlers ---
from bot.handlers.commands import (
    cmd_goals,
    cmd_help,
    cmd_leaderboard,
    cmd_scan,
    cmd_setcommands,
    cmd_setmenubutton,
    cmd_stats,
    cmd_streaks,
    cmd_workout,
)
from bot.handlers.groups import on_group_message, on_my_chat_member


def build_application():
    app = (
        ApplicationBuilder()
        .token(TELEGRAM_BOT_TOKEN)
        .connect_timeout(30.0)
        .read_timeout(30.0)
        .write_timeout(30.0)
        .build()
    )

    # membership bookkeeping runs first, for every group message (commands included)
    app.add_handler(MessageHandler(filters.ChatType.GROUPS, on_group_message), group=-1)
    app.add_handler(ChatMemberHandler(on_my_chat_member, ChatMemberHandler.MY_CHAT_MEMBER))

    app.add_handler(CommandHandler(["start", "help"], cmd_help))
    app.add_handler(CommandHandler("workout", cmd_workout))
    app.add_handler(CommandHandler(["leaderboard", "top"], cmd_leaderboard))
    app.add_handler(CommandHandler(["goals", "progress"], cmd_goals))
    app.add_handler(CommandHandler(["stats", "week"], cmd_stats))
    app.add_handler(CommandHandler("streaks", cmd_streaks))
    app.add_handler(CommandHandler("scan", cmd_scan))
    app.add_handler(CommandHandler("setcommands", cmd_setcommands))
    app.add_handler(CommandHandler(["setmenubutton", "sendmenubutton"], cmd_setmenubutton))
    return app


def main():
    """Entry point for the bot."""
    if not TELEGRAM_BOT_TOKEN:
        raise RuntimeError("TELEGRAM_BOT_TOKEN not found in .env")

    # Retry loop for network issues
    while True:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            loop.run_until_complete(db.init_db())

            app = build_application()
            logging.info("Starting polling...")
            # my_chat_member is not delivered by default
            app.run_polling(allowed_updates=Update.ALL_TYPES)
            break

        except Exception as e:
            logging.error(f"Critical error in main loop: {e}")
            logging.info("Restarting bot in 10 seconds...")
            time.sleep(10)
        finally:
            # the pool belongs to this loop; the next attempt needs a fresh one
            db.reset_pool()
            if not loop.is_closed():
                loop.close()


if __name__ == "__main__":
    main()
