import hashlib
import hmac
import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError

# Telegram WebApp initData lifetime
MAX_AGE_SECONDS = 24 * 60 * 60

WEBAPP_DATA_KEY = b"WebAppData"


class TelegramUser(BaseModel):
    """The `user` object Telegram embeds into initData as JSON."""

    model_config = ConfigDict(extra="allow")

    id: StrictInt
    first_name: str = ""
    username: Optional[str] = None


@dataclass(frozen=True)
class VerifiedPayload:
    auth_date: int
    user: Optional[TelegramUser] = None
    # every initData field except `hash`, values as received
    fields: Dict[str, str] = field(default_factory=dict)

    @property
    def query_id(self) -> Optional[str]:
        return self.fields.get("query_id")

    @property
    def start_param(self) -> Optional[str]:
        return self.fields.get("start_param")

    def as_dict(self) -> Dict[str, Any]:
        """initData as a plain mapping, `user` rendered as the parsed object."""
        out: Dict[str, Any] = dict(self.fields)
        if self.user is not None:
            out["user"] = json.loads(self.fields["user"])
        return out


def build_data_check_string(pairs: Dict[str, str]) -> str:
    """Sorted `key=value` lines of every field except `hash`."""
    return "\n".join(f"{k}={v}" for k, v in sorted(pairs.items()) if k != "hash")


def sign_data_check_string(data_check_string: str, bot_token: str) -> str:
    # secret_key = HMAC_SHA256("WebAppData", bot_token), raw bytes
    secret_key = hmac.new(WEBAPP_DATA_KEY, bot_token.encode("utf-8"), hashlib.sha256).digest()
    return hmac.new(secret_key, data_check_string.encode("utf-8"), hashlib.sha256).hexdigest()


def _parse_auth_date(value: Optional[str]) -> Optional[int]:
    # plain decimal digits only; int() would also take "1_000", padding and non-ASCII digits
    if not value or not value.isascii() or not value.lstrip("-").isdigit():
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_user(value: str) -> Optional[TelegramUser]:
    try:
        return TelegramUser.model_validate(json.loads(value))
    except (ValueError, RecursionError, ValidationError):
        return None


def validate(init_data: str, bot_token: str, *, now: Optional[int] = None) -> Optional[VerifiedPayload]:
    """
    Checks Telegram WebApp initData against the bot token.

    Docs: https://core.telegram.org/bots/webapps#validating-data-received-via-the-mini-app

    Returns the parsed payload, or None if the data is not authentic, is older
    than 24 hours, or carries a `user` field that is not a valid user object.
    The caller decides what a rejection means; this function never raises on
    bad input and does not say which check failed.
    """
    if not init_data or not isinstance(init_data, str):
        return None

    pairs = dict(parse_qsl(init_data, keep_blank_values=True))

    received_hash = pairs.pop("hash", None)
    if not received_hash:
        return None

    auth_date = _parse_auth_date(pairs.get("auth_date"))
    if auth_date is None:
        return None
    if now is None:
        now = int(time.time())
    if now - auth_date > MAX_AGE_SECONDS:
        return None

    expected_hash = sign_data_check_string(build_data_check_string(pairs), bot_token)
    if not hmac.compare_digest(expected_hash.encode("utf-8"), received_hash.encode("utf-8")):
        return None

    user = None
    if "user" in pairs:
        user = _parse_user(pairs["user"])
        if user is None:
            return None

    return VerifiedPayload(auth_date=auth_date, user=user, fields=pairs)
