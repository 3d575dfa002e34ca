from datetime import timedelta
from pathlib import Path

import pytest

from sleepcord.configuration.app_configuration import DEFAULT_SLEEP_MINUTES, AppConfig


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "app_config.yml"


def test_app_config_reads_sleep_section(config_path: Path) -> None:
    config_path.write_text(
        "sleep:\n"
        "  default_minutes: 30\n"
        "  guild_id: 123456789012345678\n"
        "  on_ready: true\n",
        encoding="utf-8",
    )

    config = AppConfig(config_path)

    assert config.default_sleep_minutes == 30
    assert config.default_sleep_delay == timedelta(minutes=30)
    assert config.target_guild_id == 123456789012345678
    assert config.sleep_on_ready is True


def test_app_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    config = AppConfig(tmp_path / "does_not_exist.yml")

    assert config.default_sleep_minutes == DEFAULT_SLEEP_MINUTES == 90
    assert config.target_guild_id is None
    assert config.sleep_on_ready is False


def test_app_config_empty_guild_id_means_no_override(config_path: Path) -> None:
    config_path.write_text("sleep:\n  guild_id:\n", encoding="utf-8")

    assert AppConfig(config_path).target_guild_id is None


@pytest.mark.parametrize("value", ["-5", "soon", "[1, 2]"])
def test_app_config_invalid_default_minutes_fall_back(config_path: Path, value: str) -> None:
    config_path.write_text(f"sleep:\n  default_minutes: {value}\n", encoding="utf-8")

    assert AppConfig(config_path).default_sleep_minutes == 90


def test_app_config_invalid_guild_id_is_ignored(config_path: Path) -> None:
    config_path.write_text("sleep:\n  guild_id: my-server\n", encoding="utf-8")

    assert AppConfig(config_path).target_guild_id is None


def test_app_config_non_mapping_document(config_path: Path) -> None:
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    assert AppConfig(config_path).default_sleep_minutes == 90


def test_app_config_malformed_yaml(config_path: Path) -> None:
    config_path.write_text("sleep: [unclosed\n", encoding="utf-8")

    config = AppConfig(config_path)

    assert config.default_sleep_minutes == 90
    assert config.target_guild_id is None


def test_app_config_reload_picks_up_changes(config_path: Path) -> None:
    config_path.write_text("sleep:\n  default_minutes: 10\n", encoding="utf-8")
    config = AppConfig(config_path)

    config_path.write_text("sleep:\n  default_minutes: 20\n", encoding="utf-8")
    config.reload()

    assert config.default_sleep_minutes == 20
