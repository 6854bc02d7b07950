from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from motoin.infra.db.models.setting import SettingRow
from motoin.ports.settings_repository import SettingsRepository


class PostgresSettingsRepository(SettingsRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_flag(self, key: str) -> bool | None:
        query = select(SettingRow.value).where(SettingRow.key == key)
        return self._session.execute(query).scalar_one_or_none()

    def set_flag(self, key: str, value: bool) -> None:
        statement = insert(SettingRow).values(key=key, value=value)
        statement = statement.on_conflict_do_update(
            index_elements=[SettingRow.key],
            set_={"value": value, "updated_at": func.now()},
        )
        self._session.execute(statement)
