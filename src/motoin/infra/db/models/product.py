from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column

from motoin.infra.db.models.base import Base
from motoin.infra.db.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin

Money = Numeric(precision=12, scale=2)


class ProductRow(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "products"

    wc_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    sku: Mapped[str | None] = mapped_column(String(100), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    price: Mapped[Decimal | None] = mapped_column(Money, nullable=True, index=True)
    regular_price: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    sale_price: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    mechanical_price: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    wholesale_price: Mapped[Decimal | None] = mapped_column(Money, nullable=True)

    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    categories: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    tags: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    images: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    compatibility: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
