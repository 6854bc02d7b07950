from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from motoin.infra.db.models.base import Base
from motoin.infra.db.models.mixins import TimestampMixin


class SettingRow(TimestampMixin, Base):
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
