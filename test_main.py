"""
Tests for configuration validation and the startup entry point.
"""

from unittest.mock import AsyncMock

import pytest

from clipcut import config
from clipcut import main as main_module


def test_validate_config_requires_token(monkeypatch):
    monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", None)

    with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
        config.validate_config()


def test_validate_config_creates_temp_dir(monkeypatch, tmp_path):
    temp_dir = tmp_path / "clipcut"
    monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setattr(config, "TEMP_DIR", temp_dir)

    config.validate_config()

    assert temp_dir.is_dir()


@pytest.mark.asyncio
async def test_main_exits_without_token(monkeypatch):
    """A missing token stops the bot with exit code 1 before polling starts."""
    run_bot = AsyncMock()
    monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", None)
    monkeypatch.setattr(main_module, "run_bot", run_bot)

    with pytest.raises(SystemExit) as exc_info:
        await main_module.main()

    assert exc_info.value.code == 1
    run_bot.assert_not_called()


@pytest.mark.asyncio
async def test_main_runs_bot(monkeypatch, tmp_path):
    run_bot = AsyncMock()
    monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setattr(config, "TEMP_DIR", tmp_path / "clipcut")
    monkeypatch.setattr(main_module, "run_bot", run_bot)

    await main_module.main()

    run_bot.assert_awaited_once()


@pytest.mark.asyncio
async def test_main_exits_when_bot_fails(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setattr(config, "TEMP_DIR", tmp_path / "clipcut")
    monkeypatch.setattr(
        main_module, "run_bot", AsyncMock(side_effect=RuntimeError("Unauthorized"))
    )

    with pytest.raises(SystemExit) as exc_info:
        await main_module.main()

    assert exc_info.value.code == 1
