"""
Asset Inventory - What lives under the local assets directory.

The inventory serves two purposes:
- It is listed in the system prompt so the model picks real files
- Its signature is part of the cache fingerprint
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AssetInventory:
    """Relative POSIX paths of every file under the assets directory, sorted."""
    files: tuple[str, ...] = ()

    @classmethod
    def scan(cls, assets_dir: Path) -> AssetInventory:
        """
        Recursively list files under assets_dir.

        A missing directory is an empty inventory.
        """
        assets_dir = Path(assets_dir)
        if not assets_dir.is_dir():
            return cls()
        files = sorted(
            path.relative_to(assets_dir).as_posix()
            for path in assets_dir.rglob("*")
            if path.is_file()
        )
        return cls(files=tuple(files))

    @property
    def signature(self) -> str:
        """Order-independent serialization; changes iff the file set changes."""
        return json.dumps(sorted(self.files))

    def __len__(self) -> int:
        return len(self.files)
