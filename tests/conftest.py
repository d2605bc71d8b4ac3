# tests/conftest.py
"""Shared fixtures: signed Telegram initData built independently of web.auth."""

import hashlib
import hmac
import json
import time
from urllib.parse import urlencode

import pytest

BOT_TOKEN = "12345:mock-token"


def sign_init_data(bot_token: str, data: dict) -> str:
    """Signs `data` the way the Telegram client does and returns the hash hex."""
    data_check_string = "\n".join(f"{k}={v}" for k, v in sorted(data.items()) if k != "hash")
    secret_key = hmac.new(b"WebAppData", bot_token.encode(), hashlib.sha256).digest()
    return hmac.new(secret_key, data_check_string.encode(), hashlib.sha256).hexdigest()


def build_init_data(bot_token: str, data: dict) -> str:
    """Query string of `data` plus a valid `hash` appended at the end."""
    return urlencode({**data, "hash": sign_init_data(bot_token, data)})


def user_fields(user_id: int = 12345, first_name: str = "Test", auth_date: int | None = None, **extra) -> dict:
    user = {"id": user_id, "first_name": first_name, **extra}
    return {
        "query_id": "AAFj...",
        "user": json.dumps(user, separators=(",", ":")),
        "auth_date": str(auth_date if auth_date is not None else int(time.time())),
    }


@pytest.fixture
def bot_token() -> str:
    return BOT_TOKEN


@pytest.fixture
def make_init_data():
    """Factory: make_init_data(data, bot_token=BOT_TOKEN) -> signed query string."""
    def _make(data: dict, bot_token: str = BOT_TOKEN) -> str:
        return build_init_data(bot_token, data)
    return _make


@pytest.fixture
def make_fields():
    """Factory for the usual query_id/user/auth_date field set."""
    return user_fields


@pytest.fixture
def valid_fields() -> dict:
    return user_fields()


@pytest.fixture
def auth_header(make_init_data, valid_fields) -> dict:
    return {"Authorization": f"tma {make_init_data(valid_fields)}"}
