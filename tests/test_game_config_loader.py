"""Tests for game_config_loader: engine tunables from YAML."""

from pathlib import Path

from hundred_days.loaders.game_config_loader import GameConfig, load_game_config
from hundred_days.util.constants import DEFAULT_HISTORY_LIMIT

CONFIG_FILE = Path(__file__).resolve().parent.parent / "config" / "game.yaml"


class TestLoadGameConfig:

    def test_missing_file_gives_defaults(self, tmp_path, caplog):
        cfg = load_game_config(tmp_path / "missing.yaml")
        assert cfg == GameConfig()
        assert "using defaults" in caplog.text

    def test_partial_file(self, tmp_path):
        f = tmp_path / "game.yaml"
        f.write_text("history_limit: 7\n")
        cfg = load_game_config(f)
        assert cfg.history_limit == 7
        assert cfg.default_activation_amount == 1
        assert cfg.scale_production_by_owner is False

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        f = tmp_path / "game.yaml"
        f.write_text("ws_port: 8765\nscale_production_by_owner: true\n")
        cfg = load_game_config(f)
        assert cfg.scale_production_by_owner is True
        assert not hasattr(cfg, "ws_port")
        assert "ws_port" in caplog.text

    def test_empty_file(self, tmp_path):
        f = tmp_path / "game.yaml"
        f.write_text("")
        assert load_game_config(f) == GameConfig()

    def test_shipped_config(self):
        cfg = load_game_config(CONFIG_FILE)
        assert cfg.history_limit == DEFAULT_HISTORY_LIMIT
        assert cfg.data_path == "config/hundred_days.yaml"
