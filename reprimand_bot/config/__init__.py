"""Configuration module for Reprimand Bot."""

from reprimand_bot.config.bot_config import DEFAULT_COUNTS_FILE, BotConfig

__all__ = ["BotConfig", "DEFAULT_COUNTS_FILE"]
