# tests/test_main.py
"""Tests for the bot entry point retry loop."""

import pytest
from unittest.mock import MagicMock, patch

import sys
import os

# Add src to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import db
import main


class TestMainLoop:
    def test_missing_token(self):
        with patch("main.TELEGRAM_BOT_TOKEN", None):
            with pytest.raises(RuntimeError):
                main.main()

    def test_retry_starts_with_fresh_pool(self):
        """A pool created on a crashed attempt's loop is not reused."""
        pools_at_start = []

        async def fake_init_db():
            pools_at_start.append(db._pool)
            db._pool = object()

        build = MagicMock(side_effect=[RuntimeError("network down"), MagicMock()])

        with patch.object(db, "_pool", None), \
             patch("main.TELEGRAM_BOT_TOKEN", "12345:mock-token"), \
             patch("db.init_db", new=fake_init_db), \
             patch("main.build_application", build), \
             patch("main.time.sleep") as sleep:
            main.main()
            pool_after = db._pool

        assert pools_at_start == [None, None]
        assert pool_after is None
        assert build.call_count == 2
        sleep.assert_called_once_with(10)


def test_reset_pool():
    with patch.object(db, "_pool", object()):
        db.reset_pool()
        assert db._pool is None
