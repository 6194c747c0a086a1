"""Tests for configuration loading."""

from pathlib import Path

from bot_playlists.core.config import (
    Config,
    create_default_config,
    ensure_directories,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    load_config,
)


class TestLoadConfig:
    def test_creates_default_file_when_missing(self, isolated_env):
        config = load_config()

        config_file = isolated_env / "config" / "bot-playlists" / "config.toml"
        assert config_file.exists()
        assert config_file.read_text(encoding="utf-8") == create_default_config()
        assert config.playlists.path == str(isolated_env / "data" / "bot-playlists" / "playlists")
        assert config.logging.level == "INFO"

    def test_default_file_parses_to_defaults(self, isolated_env):
        load_config()

        assert load_config() == Config()

    def test_reads_values(self, isolated_env):
        config_file = isolated_env / "custom.toml"
        config_file.write_text(
            '[playlists]\npath = "/srv/playlists"\n\n'
            '[logging]\nlevel = "debug"\nbackup_count = 2\nconsole_output = true\n',
            encoding="utf-8",
        )

        config = load_config(config_file)

        assert config.playlists.path == str(Path("/srv/playlists"))
        assert config.logging.level == "DEBUG"
        assert config.logging.backup_count == 2
        assert config.logging.max_file_size_mb == 10
        assert config.logging.console_output is True

    def test_invalid_toml_falls_back_to_defaults(self, isolated_env):
        config_file = isolated_env / "broken.toml"
        config_file.write_text("[playlists\npath = ", encoding="utf-8")

        assert load_config(config_file) == Config()

    def test_wrong_path_type_falls_back_to_defaults(self, isolated_env):
        config_file = isolated_env / "wrong.toml"
        config_file.write_text("[playlists]\npath = 5\n", encoding="utf-8")

        assert load_config(config_file) == Config()

    def test_environment_overrides_path(self, isolated_env, monkeypatch):
        monkeypatch.setenv("BOT_PLAYLISTS_PATH", str(isolated_env / "env-store"))

        config = load_config()

        assert config.playlists.path == str(isolated_env / "env-store")

    def test_env_file_in_config_dir_is_loaded(self, isolated_env):
        config_dir = isolated_env / "config" / "bot-playlists"
        config_dir.mkdir(parents=True)
        (config_dir / ".env").write_text(
            f"BOT_PLAYLISTS_PATH={isolated_env / 'dotenv-store'}\n", encoding="utf-8"
        )

        config = load_config()

        assert config.playlists.path == str(isolated_env / "dotenv-store")


class TestPaths:
    def test_local_config_preferred(self, isolated_env):
        (isolated_env / "config.toml").write_text("", encoding="utf-8")

        assert get_config_path() == isolated_env / "config.toml"

    def test_config_dir_used_otherwise(self, isolated_env):
        assert get_config_path() == isolated_env / "config" / "bot-playlists" / "config.toml"

    def test_log_file_default_and_override(self, isolated_env):
        config = Config()
        assert get_log_file_path(config) == get_data_dir() / "bot-playlists.log"

        config.logging.log_file = str(isolated_env / "custom.log")
        assert get_log_file_path(config) == isolated_env / "custom.log"

    def test_ensure_directories(self, isolated_env):
        config = Config()
        config.playlists.path = str(isolated_env / "store" / "nested")

        ensure_directories(config)

        assert Path(config.playlists.path).is_dir()
        assert get_data_dir().is_dir()
