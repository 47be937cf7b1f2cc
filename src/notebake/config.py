"""Configuration loader for notebake.toml."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_NAME = "notebake.toml"


@dataclass(frozen=True)
class BakeSettings:
    """Switches consumed by the baker."""
    bake_hidden: bool = True
    bake_links: bool = True
    bake_embeds: bool = True
    bake_in_list: bool = True
    convert_file_links: bool = True

    def override(self, **changes: bool | None) -> "BakeSettings":
        """Return a copy with every non-None value in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass
class VaultConfig:
    """Vault-specific configuration."""
    root: Path


@dataclass
class OutputConfig:
    """Where ``bake --write`` puts its result."""
    suffix: str = ".baked"


@dataclass
class BakeConfig:
    """Complete notebake configuration."""
    vault: VaultConfig
    bake: BakeSettings = field(default_factory=BakeSettings)
    output: OutputConfig = field(default_factory=OutputConfig)


def _load_bake_settings(data: dict[str, Any]) -> BakeSettings:
    defaults = BakeSettings()
    return BakeSettings(
        bake_hidden=bool(data.get("hidden", defaults.bake_hidden)),
        bake_links=bool(data.get("links", defaults.bake_links)),
        bake_embeds=bool(data.get("embeds", defaults.bake_embeds)),
        bake_in_list=bool(data.get("in_list", defaults.bake_in_list)),
        convert_file_links=bool(data.get("file_links", defaults.convert_file_links)),
    )


def load_config(config_path: Path | None = None, vault_path: Path | None = None) -> BakeConfig:
    """
    Load configuration from notebake.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/notebake.toml
    3. vault_path/notebake.toml

    Args:
        config_path: Explicit path to config file
        vault_path: Vault root path for fallback search

    Returns:
        BakeConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if vault_path:
        search_paths.append(vault_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    vault_data = toml_data.get("vault", {})
    vault_config = VaultConfig(
        root=Path(vault_data.get("root", vault_path or Path("./vault"))),
    )

    output_data = toml_data.get("output", {})
    output_config = OutputConfig(
        suffix=output_data.get("suffix", ".baked"),
    )

    return BakeConfig(
        vault=vault_config,
        bake=_load_bake_settings(toml_data.get("bake", {})),
        output=output_config,
    )
