from __future__ import annotations

from abc import ABC, abstractmethod


class FileStorage(ABC):
    """
    Port for storing uploaded files.

    Files are addressed by a folder ("avatars", "tickets") and a flat file
    name; names containing path separators are never resolved.
    """

    @abstractmethod
    def save(self, folder: str, name: str, content: bytes) -> None:
        """Store content under folder/name, replacing any existing file."""
        ...

    @abstractmethod
    def read(self, folder: str, name: str) -> bytes | None:
        """Return the file content, or None when there is no such file."""
        ...

    @abstractmethod
    def delete(self, folder: str, name: str) -> bool:
        """Remove the file. Returns False when it did not exist."""
        ...
