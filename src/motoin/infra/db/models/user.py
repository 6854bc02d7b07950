from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from motoin.infra.db.models.base import Base
from motoin.infra.db.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class UserRow(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="customer", index=True)

    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    tax_code: Mapped[str | None] = mapped_column(String(32), nullable=True)
    vat_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    certified_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    recipient_code: Mapped[str | None] = mapped_column(String(16), nullable=True)

    billing_address: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    shipping_address: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    use_shipping_as_billing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    payment_methods: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    theme_preference: Mapped[str | None] = mapped_column(String(10), nullable=True)
