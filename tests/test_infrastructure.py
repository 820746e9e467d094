"""Tests for the scheduler, structured logging and storage setup."""
import asyncio
import json
import logging

from logic_master.db.init_db import ensure_sqlite_directory
from logic_master.logging_config import JSONFormatter
from logic_master.services.scheduler import AsyncioScheduler


class TestAsyncioScheduler:
    """Tests for loop-backed delayed callbacks."""

    def test_runs_callbacks_and_honours_cancel(self):
        fired = []

        async def scenario():
            scheduler = AsyncioScheduler()
            scheduler.schedule(0.01, lambda: fired.append("kept"))
            handle = scheduler.schedule(0.01, lambda: fired.append("cancelled"))
            handle.cancel()
            await asyncio.sleep(0.05)

        asyncio.run(scenario())

        assert fired == ["kept"]


class TestJSONFormatter:
    """Tests for production log formatting."""

    def test_context_fields_included(self):
        record = logging.LogRecord("logic_master.test", logging.INFO, __file__, 10, "Session started", None, None)
        record.mode = "daily"
        record.session_generation = 4

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Session started"
        assert data["level"] == "INFO"
        assert data["mode"] == "daily"
        assert data["session_generation"] == 4
        assert "achievement_id" not in data


class TestEnsureSqliteDirectory:
    """Tests for creating the database directory."""

    def test_creates_parent_directory(self, tmp_path):
        target = tmp_path / "nested" / "store.db"

        ensure_sqlite_directory(f"sqlite:///{target}")

        assert target.parent.is_dir()

    def test_memory_database_ignored(self):
        ensure_sqlite_directory("sqlite:///:memory:")
