"""ORM rows. Importing this package registers every table on Base.metadata."""

from motoin.infra.db.models.base import Base
from motoin.infra.db.models.catalog_entry import CatalogEntryRow
from motoin.infra.db.models.order import OrderRow
from motoin.infra.db.models.product import ProductRow
from motoin.infra.db.models.setting import SettingRow
from motoin.infra.db.models.ticket import TicketRow
from motoin.infra.db.models.user import UserRow

__all__ = [
    "Base",
    "CatalogEntryRow",
    "OrderRow",
    "ProductRow",
    "SettingRow",
    "TicketRow",
    "UserRow",
]
