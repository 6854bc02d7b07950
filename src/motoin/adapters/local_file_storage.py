"""FileStorage backed by a directory on the local filesystem."""

from __future__ import annotations

import logging
from pathlib import Path

from motoin.ports.file_storage import FileStorage

logger = logging.getLogger(__name__)


class LocalFileStorage(FileStorage):
    """
    Stores files as root/folder/name.

    Only plain file names are accepted; anything that would resolve outside
    its folder ("../x", "a/b", ".") is treated as a missing file.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    def save(self, folder: str, name: str, content: bytes) -> None:
        path = self._path(folder, name)
        if path is None:
            raise ValueError(f"Invalid file name: {name!r}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        logger.info("File stored", extra={"folder": folder, "file_name": name, "size": len(content)})

    def read(self, folder: str, name: str) -> bytes | None:
        path = self._path(folder, name)
        if path is None or not path.is_file():
            return None
        return path.read_bytes()

    def delete(self, folder: str, name: str) -> bool:
        path = self._path(folder, name)
        if path is None or not path.is_file():
            return False
        path.unlink()
        return True

    def _path(self, folder: str, name: str) -> Path | None:
        if not name or name in (".", "..") or Path(name).name != name or "\\" in name:
            return None
        return self._root / folder / name
