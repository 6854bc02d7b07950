from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from motoin.infra.db.models.base import Base
from motoin.infra.db.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class OrderRow(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "orders"

    order_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    items: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    billing_address: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    shipping_address: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)

    shipping_method: Mapped[str] = mapped_column(String(20), nullable=False, default="premium")
    shipping_cost: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False, default=0)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    payment_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    shipped_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
