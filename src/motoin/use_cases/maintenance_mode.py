from __future__ import annotations

import logging

from motoin.ports.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)

MAINTENANCE_KEY = "maintenance"


class GetMaintenanceMode:
    """Maintenance is off unless it has been explicitly enabled."""

    def __init__(self, settings_repository: SettingsRepository) -> None:
        self._settings = settings_repository

    def execute(self) -> bool:
        return self._settings.get_flag(MAINTENANCE_KEY) is True


class SetMaintenanceMode:
    def __init__(self, settings_repository: SettingsRepository) -> None:
        self._settings = settings_repository

    def execute(self, enabled: bool) -> bool:
        self._settings.set_flag(MAINTENANCE_KEY, enabled)
        logger.info("Maintenance mode changed", extra={"enabled": enabled})
        return enabled
