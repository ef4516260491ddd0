"""Tests for the INI settings manager."""

from pathlib import Path

import pytest

from nomadutil.config import GlobalConfigManager, Paths, detect_arch
from nomadutil.config import paths as paths_module
from nomadutil.constants import (
    DEFAULT_CHECKPOINT_URL,
    DEFAULT_KEY_NAME,
    DEFAULT_RELEASE_BASE_URL,
    DEFAULT_USER_AGENT,
)


@pytest.fixture
def manager(tmp_path):
    return GlobalConfigManager(config_dir=tmp_path)


class TestLoadGlobalConfig:
    """Test loading settings."""

    def test_defaults_written_on_first_load(self, manager, tmp_path):
        """A missing settings file is created from the defaults."""
        config = manager.load_global_config()

        assert (tmp_path / "settings.conf").is_file()
        assert config["network"]["timeout_seconds"] == 10
        assert config["network"]["checkpoint_timeout_seconds"] == 3
        assert config["network"]["user_agent"] == DEFAULT_USER_AGENT
        assert config["network"]["release_base_url"] == DEFAULT_RELEASE_BASE_URL
        assert config["network"]["checkpoint_url"] == DEFAULT_CHECKPOINT_URL
        assert config["target"]["os"] == "linux"
        assert config["security"]["key_name"] == DEFAULT_KEY_NAME
        assert config["security"]["keys_dir"] == tmp_path / "keys"
        assert config["install"]["binary_dir"] == Path("/usr/local/bin")
        assert config["install"]["service_dir"] == Path("/etc/systemd/system")
        assert config["console_log_level"] == "INFO"

    def test_round_trip(self, manager):
        """Saved values are read back unchanged."""
        config = manager.load_global_config()
        config["target"]["arch"] = "arm64"
        config["network"]["timeout_seconds"] = 30
        manager.save_global_config(config)

        reloaded = manager.load_global_config()
        assert reloaded["target"]["arch"] == "arm64"
        assert reloaded["network"]["timeout_seconds"] == 30

    def test_user_overrides(self, manager, tmp_path):
        """Values in the file override the defaults."""
        (tmp_path / "settings.conf").write_text(
            "[DEFAULT]\n"
            "log_level = debug\n"
            "\n"
            "[network]\n"
            "release_base_url = http://mirror.local/  # local mirror\n"
            "\n"
            "[install]\n"
            "binary_dir = ~/bin\n",
            encoding="utf-8",
        )

        config = manager.load_global_config()

        assert config["log_level"] == "DEBUG"
        assert config["network"]["release_base_url"] == "http://mirror.local"
        assert config["install"]["binary_dir"] == Path.home() / "bin"
        assert config["network"]["timeout_seconds"] == 10

    @pytest.mark.parametrize("raw", ["soon", "0", "-5"])
    def test_invalid_timeout_falls_back(self, manager, tmp_path, caplog, raw):
        """A non-numeric or non-positive timeout uses the default."""
        (tmp_path / "settings.conf").write_text(
            f"[network]\ntimeout_seconds = {raw}\n"
            f"checkpoint_timeout_seconds = {raw}\n",
            encoding="utf-8",
        )

        config = manager.load_global_config()

        assert config["network"]["timeout_seconds"] == 10
        assert config["network"]["checkpoint_timeout_seconds"] == 3
        assert "Invalid positive integer" in caplog.text

    def test_unwritable_directory(self, tmp_path, caplog):
        """Defaults are still returned when they cannot be saved."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        manager = GlobalConfigManager(config_dir=blocker / "nomadutil")

        config = manager.load_global_config()

        assert config["target"]["os"] == "linux"
        assert "Could not write default settings" in caplog.text


class TestPaths:
    """Test path helpers."""

    def test_config_dir_env_override(self, monkeypatch, tmp_path):
        """NOMADUTIL_CONFIG_DIR replaces the default directory."""
        monkeypatch.setenv("NOMADUTIL_CONFIG_DIR", str(tmp_path))
        assert Paths.config_dir() == tmp_path

    def test_keys_dir_follows_override(self, monkeypatch, tmp_path):
        """The key directory moves with NOMADUTIL_CONFIG_DIR."""
        monkeypatch.setenv("NOMADUTIL_CONFIG_DIR", str(tmp_path))
        assert Paths.keys_dir() == tmp_path / "keys"

    def test_config_dir_default(self, monkeypatch):
        """Without the override the XDG style default is used."""
        monkeypatch.delenv("NOMADUTIL_CONFIG_DIR", raising=False)
        assert Paths.config_dir() == Paths.CONFIG_DIR

    def test_expand_path(self, monkeypatch):
        """Home and environment variables are expanded."""
        monkeypatch.setenv("NOMAD_TEST_DIR", "/srv/nomad")
        assert Paths.expand_path("$NOMAD_TEST_DIR/bin") == Path("/srv/nomad/bin")
        assert Paths.expand_path("~/x") == Path.home() / "x"

    @pytest.mark.parametrize(
        ("machine", "arch"),
        [
            ("x86_64", "amd64"),
            ("aarch64", "arm64"),
            ("riscv128", "amd64"),
        ],
    )
    def test_detect_arch(self, monkeypatch, machine, arch):
        """Machine names map to release architecture names."""
        monkeypatch.setattr(paths_module.platform, "machine", lambda: machine)
        assert detect_arch() == arch
