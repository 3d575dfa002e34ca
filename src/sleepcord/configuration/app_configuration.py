from __future__ import annotations
from datetime import timedelta
from pathlib import Path
import fcntl
from typing import Any, Dict, Optional
import yaml

from sleepcord.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_SLEEP_MINUTES = 90


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    The class caches the contents of ``./config/app_config.yml`` and exposes
    typed shortcuts for the ``sleep`` section. A missing or malformed file
    falls back to defaults so the bot can still start.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
            return {}
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            logger.error("[APP CONFIGURATION] Config %s is not a mapping; using defaults.", self.config_path)
            return {}
        return data

    def _sleep_section(self) -> Dict[str, Any]:
        section = self._data.get("sleep", {})
        return section if isinstance(section, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping."""
        self._data = self.load_from_disk()
        return self._data

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def default_sleep_minutes(self) -> int:
        """Minutes a bare ``!sleep`` waits before disconnecting everyone.

        Negative or non-numeric values fall back to 90 minutes.
        """
        value = self._sleep_section().get("default_minutes", DEFAULT_SLEEP_MINUTES)
        try:
            minutes = int(value)
        except (TypeError, ValueError):
            logger.warning("[APP CONFIGURATION] Invalid sleep.default_minutes %r; using %d", value, DEFAULT_SLEEP_MINUTES)
            return DEFAULT_SLEEP_MINUTES
        if minutes < 0:
            logger.warning("[APP CONFIGURATION] Negative sleep.default_minutes %r; using %d", value, DEFAULT_SLEEP_MINUTES)
            return DEFAULT_SLEEP_MINUTES
        return minutes

    @property
    def default_sleep_delay(self) -> timedelta:
        return timedelta(minutes=self.default_sleep_minutes)

    @property
    def target_guild_id(self) -> Optional[int]:
        """Guild that ``!sleep`` acts on instead of the guild the command came from.

        ``None`` (the default) targets the message's own guild.
        """
        value = self._sleep_section().get("guild_id")
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("[APP CONFIGURATION] Invalid sleep.guild_id %r; ignoring override", value)
            return None

    @property
    def sleep_on_ready(self) -> bool:
        """Whether every cached guild gets a sleep countdown as soon as the bot is ready."""
        return bool(self._sleep_section().get("on_ready", False))


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
