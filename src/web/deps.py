import logging
from typing import Any, Dict, Optional

from fastapi import Header, HTTPException, status

import config
from web.auth import validate

logger = logging.getLogger(__name__)

# One message for every failed check, so callers cannot probe which one failed
AUTH_FAILED_DETAIL = "Invalid or expired Telegram data"


def get_current_user(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> Dict[str, Any]:
    """
    Dependency: extracts the user from Telegram Mini App initData.

    Expects header:
      Authorization: tma <initData>
    """
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing Authorization")

    if not authorization.lower().startswith("tma "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Authorization scheme")

    init_data = authorization[4:].strip()
    if not init_data:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Empty initData")

    bot_token = config.TELEGRAM_BOT_TOKEN
    if not bot_token:
        logger.error("TELEGRAM_BOT_TOKEN is not configured, refusing to authenticate")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error: TELEGRAM_BOT_TOKEN missing",
        )

    payload = validate(init_data, bot_token)
    if payload is None:
        logger.warning("initData rejected")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTH_FAILED_DETAIL)

    if payload.user is None:
        logger.warning("initData without user")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTH_FAILED_DETAIL)

    return {
        "user_id": payload.user.id,
        "user": payload.user,
        "init_data": init_data,
        "payload": payload,
    }
