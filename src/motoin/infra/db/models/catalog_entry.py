from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from motoin.infra.db.models.base import Base
from motoin.infra.db.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class CatalogEntryRow(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "catalog_entries"

    make: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    model: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    # composite_key(make, model); UNIQUE closes the check-then-insert race in imports
    normalized_key: Mapped[str] = mapped_column(String(260), nullable=False, unique=True)

    displacement: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    years: Mapped[list[int]] = mapped_column(ARRAY(Integer), nullable=False, default=list)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="Unknown")
    country: Mapped[str] = mapped_column(String(100), nullable=False, default="Unknown")
