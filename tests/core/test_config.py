"""测试配置管理."""

from pathlib import Path

import pytest

from tradefeed.core.config import (
    ConfigManager,
    StorageConfig,
    TradeFeedConfig,
    get_default_config,
    load_config_from_env,
)

ENV_VARS = (
    "TRADEFEED_DATA_FILE",
    "TRADEFEED_RETENTION",
    "TRADEFEED_HTTP_TIMEOUT",
    "TRADEFEED_RETRY_ATTEMPTS",
    "TRADEFEED_LOG_LEVEL",
    "TRADEFEED_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """测试默认配置."""

    def test_default_values(self):
        config = get_default_config()

        assert config.http.timeout == 20.0
        assert config.http.user_agent.startswith("trade-dashboard/1.0")
        assert config.retry.attempts == 3
        assert config.retry.backoff == 0.8
        assert config.retry.mid_rate_backoff == 1.0
        assert config.storage.path == "public/trade-data.json"
        assert config.storage.retention == 2000
        assert config.storage.dedup_minutes == 10.0
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_dict_round_trip(self):
        config = TradeFeedConfig.from_dict({"storage": {"retention": 50}})

        assert config.storage.retention == 50
        assert TradeFeedConfig.from_dict(config.to_dict()) == config


class TestConfigManager:
    """测试配置管理器."""

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        manager = ConfigManager(tmp_path / "tradefeed.toml")

        assert manager.get_config() == TradeFeedConfig()

    def test_loads_toml(self, tmp_path: Path):
        path = tmp_path / "tradefeed.toml"
        path.write_text(
            '[storage]\npath = "data/series.json"\nretention = 500\n\n[retry]\nbackoff = 0.1\n',
            encoding="utf-8",
        )

        config = ConfigManager(path).get_config()

        assert config.storage.path == "data/series.json"
        assert config.storage.retention == 500
        assert config.retry.backoff == 0.1
        assert config.retry.attempts == 3

    @pytest.mark.parametrize(
        "content",
        ["[storage\nbroken", "[storage]\nunknown_key = 1\n", "[storage]\nretention = 0\n"],
    )
    def test_invalid_file_falls_back_to_defaults(self, tmp_path: Path, content: str):
        path = tmp_path / "tradefeed.toml"
        path.write_text(content, encoding="utf-8")

        assert ConfigManager(path).get_config() == TradeFeedConfig()

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / "tradefeed.toml"
        path.write_text('[storage]\npath = "from-file.json"\nretention = 10\n', encoding="utf-8")
        monkeypatch.setenv("TRADEFEED_DATA_FILE", "from-env.json")
        monkeypatch.setenv("TRADEFEED_HTTP_TIMEOUT", "5")

        config = ConfigManager(path).get_config()

        assert config.storage.path == "from-env.json"
        assert config.storage.retention == 10
        assert config.http.timeout == 5.0

    def test_env_can_be_disabled(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TRADEFEED_RETENTION", "7")

        config = ConfigManager(tmp_path / "missing.toml", use_env=False).get_config()

        assert config.storage.retention == 2000

    def test_update_config(self, tmp_path: Path):
        manager = ConfigManager(tmp_path / "missing.toml")
        manager.update_config(logging={"level": "DEBUG"})

        assert manager.get_config().logging.level == "DEBUG"
        assert manager.get_config().storage.retention == 2000

    @pytest.mark.parametrize("retention", [0, -1])
    def test_non_positive_retention_is_rejected(self, retention: int):
        with pytest.raises(ValueError, match="retention"):
            StorageConfig(retention=retention)

    def test_zero_retention_from_env_is_rejected(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TRADEFEED_RETENTION", "0")

        with pytest.raises(ValueError, match="retention"):
            ConfigManager(tmp_path / "missing.toml")


def test_load_config_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TRADEFEED_RETENTION", "100")
    monkeypatch.setenv("TRADEFEED_RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("TRADEFEED_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("TRADEFEED_LOG_FILE", "logs/tradefeed.jsonl")

    assert load_config_from_env() == {
        "storage": {"retention": 100},
        "retry": {"attempts": 5},
        "logging": {"level": "DEBUG", "file": "logs/tradefeed.jsonl"},
    }
