"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsPathService, FsStorage, VaultReader
from .adapters.markdown_parser import MarkdownParser
from .adapters.resolver_index import MarkdownIndex, VaultResolver
from .config import BakeConfig, load_config
from .core.baker import BakeContext


@dataclass
class Runtime:
    """Container for all wired components."""
    storage: FsStorage
    reader: VaultReader
    index: MarkdownIndex
    resolver: VaultResolver
    paths: FsPathService
    config: BakeConfig

    def context(self) -> BakeContext:
        return BakeContext(
            reader=self.reader,
            index=self.index,
            resolver=self.resolver,
            paths=self.paths,
        )


def build_runtime(
    vault_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a vault."""
    config = load_config(config_path=config_path, vault_path=vault_path)

    if vault_path is None:
        vault_path = config.vault.root

    storage = FsStorage(vault_path)
    return Runtime(
        storage=storage,
        reader=VaultReader(storage),
        index=MarkdownIndex(storage, MarkdownParser()),
        resolver=VaultResolver(storage),
        paths=FsPathService(storage),
        config=config,
    )
