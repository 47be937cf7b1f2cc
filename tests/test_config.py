"""Tests for configuration loading."""

import tempfile
from pathlib import Path

from notebake.config import BakeSettings, load_config


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(config_path=Path(tmpdir) / "missing.toml")

    assert config.vault.root == Path("./vault")
    assert config.bake == BakeSettings()
    assert config.output.suffix == ".baked"


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "notebake.toml"
        config_path.write_text("""
[vault]
root = "my-vault"

[bake]
hidden = false
links = false
in_list = false

[output]
suffix = "-flat"
""")

        config = load_config(config_path=config_path)

        assert config.vault.root == Path("my-vault")
        assert config.bake.bake_hidden is False
        assert config.bake.bake_links is False
        assert config.bake.bake_in_list is False
        assert config.bake.bake_embeds is True
        assert config.bake.convert_file_links is True
        assert config.output.suffix == "-flat"


def test_load_config_search_cwd(monkeypatch):
    """Test config search in current working directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.chdir(tmpdir)
        (Path(tmpdir) / "notebake.toml").write_text("""
[bake]
embeds = false
""")

        config = load_config()
        assert config.bake.bake_embeds is False


def test_load_config_search_vault():
    """Test config search in vault directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        vault_path = Path(tmpdir) / "vault"
        vault_path.mkdir()
        (vault_path / "notebake.toml").write_text("""
[bake]
file_links = false
""")

        config = load_config(vault_path=vault_path)
        assert config.vault.root == vault_path
        assert config.bake.convert_file_links is False


def test_settings_override():
    settings = BakeSettings(bake_hidden=False)
    changed = settings.override(bake_hidden=True, bake_links=None)
    assert changed.bake_hidden is True
    assert changed.bake_links is True
    assert settings.bake_hidden is False
