"""PostgreSQL implementation of UserRepository."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from motoin.adapters.json_codecs import (
    address_from_json,
    address_to_json,
    payment_method_from_json,
    payment_method_to_json,
)
from motoin.adapters.sql_patterns import LIKE_ESCAPE, contains_pattern
from motoin.domain.errors import ConflictError
from motoin.domain.paging import Paging, SearchResult
from motoin.domain.users import Role, ThemePreference, User, UserFilters, UserStats
from motoin.infra.db.models.user import UserRow
from motoin.ports.user_repository import UserRepository


class PostgresUserRepository(UserRepository):
    """
    PostgreSQL implementation of UserRepository.

    Addresses and payment methods live in JSONB columns of the users row.
    The UNIQUE e-mail constraint is translated to ConflictError.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: str) -> User | None:
        row = self._session.get(UserRow, UUID(user_id))
        return self._to_domain(row) if row else None

    def get_by_email(self, email: str) -> User | None:
        query = select(UserRow).where(UserRow.email == email)
        row = self._session.execute(query).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def add(self, user: User) -> User:
        return self._write(UserRow(id=UUID(user.id)), user, add=True)

    def save(self, user: User) -> User:
        row = self._session.get(UserRow, UUID(user.id))
        if row is None:
            return self.add(user)
        return self._write(row, user, add=False)

    def delete(self, user_id: str) -> bool:
        result = self._session.execute(delete(UserRow).where(UserRow.id == UUID(user_id)))
        return bool(result.rowcount)

    def search(self, filters: UserFilters, paging: Paging) -> SearchResult[User]:
        query = select(UserRow)
        if filters.role is not None:
            query = query.where(UserRow.role == filters.role.value)
        if filters.search:
            pattern = contains_pattern(filters.search)
            full_name = func.concat_ws(" ", UserRow.first_name, UserRow.last_name)
            query = query.where(
                or_(
                    full_name.ilike(pattern, escape=LIKE_ESCAPE),
                    UserRow.email.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        count_query = select(func.count()).select_from(query.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        query = query.order_by(UserRow.created_at.desc()).offset(paging.offset).limit(paging.per_page)
        rows = self._session.execute(query).scalars().all()

        return SearchResult(items=[self._to_domain(row) for row in rows], total_count=total_count)

    def stats(self) -> UserStats:
        query = select(
            func.count(),
            func.count().filter(UserRow.role == Role.CUSTOMER.value),
            func.count().filter(UserRow.role == Role.ADMIN.value),
            func.count().filter(UserRow.is_active.is_(True)),
            func.count().filter(UserRow.is_active.is_(False)),
        )
        total, customers, admins, active, inactive = self._session.execute(query).one()
        return UserStats(
            total=total,
            customers=customers,
            admins=admins,
            active=active,
            inactive=inactive,
        )

    def _write(self, row: UserRow, user: User, add: bool) -> User:
        try:
            with self._session.begin_nested():
                self._copy_user(row, user)
                if add:
                    self._session.add(row)
        except IntegrityError as exc:
            raise ConflictError("E-mail address already registered", email=user.email) from exc

        self._session.refresh(row)
        return self._to_domain(row)

    @staticmethod
    def _copy_user(row: UserRow, user: User) -> None:
        row.email = user.email
        row.password_hash = user.password_hash
        row.first_name = user.first_name
        row.last_name = user.last_name
        row.role = user.role.value
        row.phone = user.phone
        row.tax_code = user.tax_code
        row.vat_number = user.vat_number
        row.certified_email = user.certified_email
        row.recipient_code = user.recipient_code
        row.billing_address = address_to_json(user.billing_address)
        row.shipping_address = address_to_json(user.shipping_address)
        row.use_shipping_as_billing = user.use_shipping_as_billing
        row.payment_methods = [payment_method_to_json(method) for method in user.payment_methods]
        row.is_active = user.is_active
        row.avatar = user.avatar
        row.theme_preference = user.theme_preference.value if user.theme_preference else None

    @staticmethod
    def _to_domain(row: UserRow) -> User:
        return User(
            id=str(row.id),
            email=row.email,
            password_hash=row.password_hash,
            first_name=row.first_name,
            last_name=row.last_name,
            role=Role(row.role),
            phone=row.phone,
            tax_code=row.tax_code,
            vat_number=row.vat_number,
            certified_email=row.certified_email,
            recipient_code=row.recipient_code,
            billing_address=address_from_json(row.billing_address),
            shipping_address=address_from_json(row.shipping_address),
            use_shipping_as_billing=row.use_shipping_as_billing,
            payment_methods=[payment_method_from_json(data) for data in row.payment_methods or []],
            is_active=row.is_active,
            avatar=row.avatar,
            theme_preference=ThemePreference(row.theme_preference) if row.theme_preference else None,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
