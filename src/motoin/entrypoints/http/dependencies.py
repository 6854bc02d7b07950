"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons (password hasher, token service) use lru_cache.
The token blacklist lives on app.state, one per application instance.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from motoin.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from motoin.adapters.jwt_token_service import JwtTokenService
from motoin.adapters.local_file_storage import LocalFileStorage
from motoin.adapters.postgres_catalog_repository import PostgresCatalogRepository
from motoin.adapters.postgres_order_repository import PostgresOrderRepository
from motoin.adapters.postgres_product_repository import PostgresProductRepository
from motoin.adapters.postgres_settings_repository import PostgresSettingsRepository
from motoin.adapters.postgres_ticket_repository import PostgresTicketRepository
from motoin.adapters.postgres_user_repository import PostgresUserRepository
from motoin.domain.errors import ForbiddenError, UnauthorizedError
from motoin.domain.users import User
from motoin.infra.config import jwt_expires_hours, jwt_secret, upload_dir
from motoin.infra.db.session import get_session
from motoin.ports.catalog_repository import CatalogRepository
from motoin.ports.file_storage import FileStorage
from motoin.ports.order_repository import OrderRepository
from motoin.ports.product_repository import ProductRepository
from motoin.ports.security import PasswordHasher, TokenBlacklist, TokenService
from motoin.ports.settings_repository import SettingsRepository
from motoin.ports.ticket_repository import TicketRepository
from motoin.ports.user_repository import UserRepository
from motoin.use_cases.accounts import (
    AuthenticatedUser,
    AuthenticateToken,
    ChangePassword,
    LoginUser,
    LogoutUser,
    RegisterUser,
    UpdateProfile,
)
from motoin.use_cases.catalog_lookups import (
    ListDisplacements,
    ListMakes,
    ListModels,
    ListYears,
    SearchModels,
    SummarizeFilters,
)
from motoin.use_cases.import_catalog import (
    BulkCreateMissingEntries,
    CheckMissingEntries,
    ImportCatalog,
)
from motoin.use_cases.maintenance_mode import GetMaintenanceMode, SetMaintenanceMode
from motoin.use_cases.manage_catalog import (
    CreateCatalogEntry,
    DeleteCatalogEntry,
    GetCatalogEntry,
    UpdateCatalogEntry,
)
from motoin.use_cases.manage_orders import (
    DeleteOrder,
    GetOrder,
    GetOrderStats,
    ListOrders,
    PlaceOrder,
    UpdateOrder,
)
from motoin.use_cases.manage_products import (
    CreateProduct,
    DeleteProduct,
    GetProduct,
    UpdateProduct,
)
from motoin.use_cases.manage_tickets import (
    CountUnreadTickets,
    DeleteTicket,
    GetTicketStats,
    ListTickets,
    OpenTicket,
    PostTicketMessage,
    TakeTicket,
    UpdateTicket,
    ViewTicket,
)
from motoin.use_cases.manage_users import (
    CreateUser,
    DeleteUser,
    GetUser,
    GetUserStats,
    ListUsers,
    UpdateUser,
)
from motoin.use_cases.payment_methods import (
    AddPaymentMethod,
    RemovePaymentMethod,
    UpdatePaymentMethod,
)
from motoin.use_cases.search_catalog import SearchCatalog
from motoin.use_cases.search_products import (
    ListProductCategories,
    QuickSearchProducts,
    SearchProducts,
)
from motoin.use_cases.uploads import (
    AVATAR_FOLDER,
    TICKET_FOLDER,
    ReadUploadedFile,
    RemoveAvatar,
    TicketAttachmentStore,
    UploadAvatar,
)

bearer = HTTPBearer(auto_error=False, description="JWT issued by /v1/auth/login")


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() commits on success, rolls back on exception
    and always closes the session.
    """
    with get_session() as session:
        yield session


# ==============================================================================
# Repositories (per request)
# ==============================================================================


def get_catalog_repository(db: Session = Depends(get_db)) -> CatalogRepository:
    return PostgresCatalogRepository(session=db)


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return PostgresProductRepository(session=db)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return PostgresUserRepository(session=db)


def get_order_repository(db: Session = Depends(get_db)) -> OrderRepository:
    return PostgresOrderRepository(session=db)


def get_ticket_repository(db: Session = Depends(get_db)) -> TicketRepository:
    return PostgresTicketRepository(session=db)


def get_settings_repository(db: Session = Depends(get_db)) -> SettingsRepository:
    return PostgresSettingsRepository(session=db)


# ==============================================================================
# Security singletons
# ==============================================================================


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher()


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """
    Raises:
        RuntimeError: If JWT_SECRET is not set
    """
    return JwtTokenService(secret=jwt_secret(), expires_hours=jwt_expires_hours())


def get_token_blacklist(request: Request) -> TokenBlacklist:
    return request.app.state.token_blacklist


# ==============================================================================
# File storage
# ==============================================================================


@lru_cache(maxsize=1)
def get_file_storage() -> FileStorage:
    return LocalFileStorage(root=upload_dir())


def get_ticket_attachment_store(storage: FileStorage = Depends(get_file_storage)) -> TicketAttachmentStore:
    return TicketAttachmentStore(file_storage=storage)


# ==============================================================================
# Authentication
# ==============================================================================


def get_authenticate_token_use_case(
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> AuthenticateToken:
    return AuthenticateToken(user_repository=users, token_service=tokens, token_blacklist=blacklist)


def get_authenticated_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    use_case: AuthenticateToken = Depends(get_authenticate_token_use_case),
) -> AuthenticatedUser:
    """
    Resolve the bearer token of the current request.

    Raises:
        UnauthorizedError: If no bearer token was sent or it is not valid
        TokenExpiredError: If the token has expired
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")
    return use_case.execute(credentials.credentials)


def get_current_user(session: AuthenticatedUser = Depends(get_authenticated_session)) -> User:
    return session.user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


# ==============================================================================
# Catalog use cases
# ==============================================================================


def get_list_makes_use_case(repo: CatalogRepository = Depends(get_catalog_repository)) -> ListMakes:
    return ListMakes(catalog_repository=repo)


def get_list_displacements_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> ListDisplacements:
    return ListDisplacements(catalog_repository=repo)


def get_list_models_use_case(repo: CatalogRepository = Depends(get_catalog_repository)) -> ListModels:
    return ListModels(catalog_repository=repo)


def get_list_years_use_case(repo: CatalogRepository = Depends(get_catalog_repository)) -> ListYears:
    return ListYears(catalog_repository=repo)


def get_summarize_filters_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> SummarizeFilters:
    return SummarizeFilters(catalog_repository=repo)


def get_search_models_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> SearchModels:
    return SearchModels(catalog_repository=repo)


def get_search_catalog_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> SearchCatalog:
    return SearchCatalog(catalog_repository=repo)


def get_get_catalog_entry_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> GetCatalogEntry:
    return GetCatalogEntry(catalog_repository=repo)


def get_create_catalog_entry_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> CreateCatalogEntry:
    return CreateCatalogEntry(catalog_repository=repo)


def get_update_catalog_entry_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> UpdateCatalogEntry:
    return UpdateCatalogEntry(catalog_repository=repo)


def get_delete_catalog_entry_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> DeleteCatalogEntry:
    return DeleteCatalogEntry(catalog_repository=repo)


def get_check_missing_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> CheckMissingEntries:
    return CheckMissingEntries(catalog_repository=repo)


def get_bulk_create_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> BulkCreateMissingEntries:
    return BulkCreateMissingEntries(catalog_repository=repo)


def get_import_catalog_use_case(
    repo: CatalogRepository = Depends(get_catalog_repository),
) -> ImportCatalog:
    return ImportCatalog(catalog_repository=repo)


# ==============================================================================
# Product use cases
# ==============================================================================


def get_search_products_use_case(
    repo: ProductRepository = Depends(get_product_repository),
) -> SearchProducts:
    return SearchProducts(product_repository=repo)


def get_quick_search_products_use_case(
    repo: ProductRepository = Depends(get_product_repository),
) -> QuickSearchProducts:
    return QuickSearchProducts(product_repository=repo)


def get_list_categories_use_case(
    repo: ProductRepository = Depends(get_product_repository),
) -> ListProductCategories:
    return ListProductCategories(product_repository=repo)


def get_get_product_use_case(repo: ProductRepository = Depends(get_product_repository)) -> GetProduct:
    return GetProduct(product_repository=repo)


def get_create_product_use_case(
    repo: ProductRepository = Depends(get_product_repository),
) -> CreateProduct:
    return CreateProduct(product_repository=repo)


def get_update_product_use_case(
    repo: ProductRepository = Depends(get_product_repository),
) -> UpdateProduct:
    return UpdateProduct(product_repository=repo)


def get_delete_product_use_case(
    repo: ProductRepository = Depends(get_product_repository),
) -> DeleteProduct:
    return DeleteProduct(product_repository=repo)


# ==============================================================================
# Account use cases
# ==============================================================================


def get_register_user_use_case(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> RegisterUser:
    return RegisterUser(user_repository=users, password_hasher=hasher, token_service=tokens)


def get_login_user_use_case(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> LoginUser:
    return LoginUser(user_repository=users, password_hasher=hasher, token_service=tokens)


def get_logout_user_use_case(
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> LogoutUser:
    return LogoutUser(token_blacklist=blacklist)


def get_update_profile_use_case(users: UserRepository = Depends(get_user_repository)) -> UpdateProfile:
    return UpdateProfile(user_repository=users)


def get_upload_avatar_use_case(
    users: UserRepository = Depends(get_user_repository),
    storage: FileStorage = Depends(get_file_storage),
) -> UploadAvatar:
    return UploadAvatar(user_repository=users, file_storage=storage)


def get_remove_avatar_use_case(
    users: UserRepository = Depends(get_user_repository),
    storage: FileStorage = Depends(get_file_storage),
) -> RemoveAvatar:
    return RemoveAvatar(user_repository=users, file_storage=storage)


def get_read_avatar_use_case(storage: FileStorage = Depends(get_file_storage)) -> ReadUploadedFile:
    return ReadUploadedFile(file_storage=storage, folder=AVATAR_FOLDER)


def get_change_password_use_case(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> ChangePassword:
    return ChangePassword(user_repository=users, password_hasher=hasher)


def get_add_payment_method_use_case(
    users: UserRepository = Depends(get_user_repository),
) -> AddPaymentMethod:
    return AddPaymentMethod(user_repository=users)


def get_update_payment_method_use_case(
    users: UserRepository = Depends(get_user_repository),
) -> UpdatePaymentMethod:
    return UpdatePaymentMethod(user_repository=users)


def get_remove_payment_method_use_case(
    users: UserRepository = Depends(get_user_repository),
) -> RemovePaymentMethod:
    return RemovePaymentMethod(user_repository=users)


def get_list_users_use_case(users: UserRepository = Depends(get_user_repository)) -> ListUsers:
    return ListUsers(user_repository=users)


def get_user_stats_use_case(users: UserRepository = Depends(get_user_repository)) -> GetUserStats:
    return GetUserStats(user_repository=users)


def get_get_user_use_case(users: UserRepository = Depends(get_user_repository)) -> GetUser:
    return GetUser(user_repository=users)


def get_create_user_use_case(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CreateUser:
    return CreateUser(user_repository=users, password_hasher=hasher)


def get_update_user_use_case(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UpdateUser:
    return UpdateUser(user_repository=users, password_hasher=hasher)


def get_delete_user_use_case(users: UserRepository = Depends(get_user_repository)) -> DeleteUser:
    return DeleteUser(user_repository=users)


# ==============================================================================
# Order use cases
# ==============================================================================


def get_place_order_use_case(orders: OrderRepository = Depends(get_order_repository)) -> PlaceOrder:
    return PlaceOrder(order_repository=orders)


def get_list_orders_use_case(orders: OrderRepository = Depends(get_order_repository)) -> ListOrders:
    return ListOrders(order_repository=orders)


def get_get_order_use_case(orders: OrderRepository = Depends(get_order_repository)) -> GetOrder:
    return GetOrder(order_repository=orders)


def get_update_order_use_case(orders: OrderRepository = Depends(get_order_repository)) -> UpdateOrder:
    return UpdateOrder(order_repository=orders)


def get_delete_order_use_case(orders: OrderRepository = Depends(get_order_repository)) -> DeleteOrder:
    return DeleteOrder(order_repository=orders)


def get_order_stats_use_case(orders: OrderRepository = Depends(get_order_repository)) -> GetOrderStats:
    return GetOrderStats(order_repository=orders)


# ==============================================================================
# Ticket use cases
# ==============================================================================


def get_open_ticket_use_case(
    tickets: TicketRepository = Depends(get_ticket_repository),
    orders: OrderRepository = Depends(get_order_repository),
    attachments: TicketAttachmentStore = Depends(get_ticket_attachment_store),
) -> OpenTicket:
    return OpenTicket(ticket_repository=tickets, order_repository=orders, attachment_store=attachments)


def get_list_tickets_use_case(
    tickets: TicketRepository = Depends(get_ticket_repository),
) -> ListTickets:
    return ListTickets(ticket_repository=tickets)


def get_count_unread_tickets_use_case(
    tickets: TicketRepository = Depends(get_ticket_repository),
) -> CountUnreadTickets:
    return CountUnreadTickets(ticket_repository=tickets)


def get_ticket_stats_use_case(
    tickets: TicketRepository = Depends(get_ticket_repository),
) -> GetTicketStats:
    return GetTicketStats(ticket_repository=tickets)


def get_view_ticket_use_case(tickets: TicketRepository = Depends(get_ticket_repository)) -> ViewTicket:
    return ViewTicket(ticket_repository=tickets)


def get_post_ticket_message_use_case(
    tickets: TicketRepository = Depends(get_ticket_repository),
    attachments: TicketAttachmentStore = Depends(get_ticket_attachment_store),
) -> PostTicketMessage:
    return PostTicketMessage(ticket_repository=tickets, attachment_store=attachments)


def get_update_ticket_use_case(
    tickets: TicketRepository = Depends(get_ticket_repository),
    users: UserRepository = Depends(get_user_repository),
) -> UpdateTicket:
    return UpdateTicket(ticket_repository=tickets, user_repository=users)


def get_take_ticket_use_case(tickets: TicketRepository = Depends(get_ticket_repository)) -> TakeTicket:
    return TakeTicket(ticket_repository=tickets)


def get_delete_ticket_use_case(
    tickets: TicketRepository = Depends(get_ticket_repository),
) -> DeleteTicket:
    return DeleteTicket(ticket_repository=tickets)


def get_read_ticket_file_use_case(storage: FileStorage = Depends(get_file_storage)) -> ReadUploadedFile:
    return ReadUploadedFile(file_storage=storage, folder=TICKET_FOLDER)


# ==============================================================================
# Settings use cases
# ==============================================================================


def get_maintenance_mode_use_case(
    settings: SettingsRepository = Depends(get_settings_repository),
) -> GetMaintenanceMode:
    return GetMaintenanceMode(settings_repository=settings)


def get_set_maintenance_mode_use_case(
    settings: SettingsRepository = Depends(get_settings_repository),
) -> SetMaintenanceMode:
    return SetMaintenanceMode(settings_repository=settings)
