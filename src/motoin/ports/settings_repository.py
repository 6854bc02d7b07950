from __future__ import annotations

from abc import ABC, abstractmethod


class SettingsRepository(ABC):
    """Port for boolean key/value shop settings."""

    @abstractmethod
    def get_flag(self, key: str) -> bool | None:
        """Stored value, or None if the key was never set."""
        ...

    @abstractmethod
    def set_flag(self, key: str, value: bool) -> None:
        """Insert or overwrite the value for key."""
        ...
