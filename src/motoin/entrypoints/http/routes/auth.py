"""Authentication, self-service profile and admin user management."""

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import Response

from motoin.domain.users import User
from motoin.entrypoints.http.dependencies import (
    get_add_payment_method_use_case,
    get_authenticated_session,
    get_change_password_use_case,
    get_create_user_use_case,
    get_current_user,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_login_user_use_case,
    get_logout_user_use_case,
    get_read_avatar_use_case,
    get_register_user_use_case,
    get_remove_avatar_use_case,
    get_remove_payment_method_use_case,
    get_update_payment_method_use_case,
    get_update_profile_use_case,
    get_update_user_use_case,
    get_upload_avatar_use_case,
    get_user_stats_use_case,
    require_admin,
)
from motoin.entrypoints.http.dtos.common import MessageResponseDTO
from motoin.entrypoints.http.dtos.users import (
    AdminUserCreateDTO,
    AdminUserUpdateDTO,
    AuthResponseDTO,
    ChangePasswordRequestDTO,
    LoginRequestDTO,
    PaymentMethodListResponseDTO,
    PaymentMethodWriteDTO,
    ProfileUpdateDTO,
    RegisterRequestDTO,
    UserDataResponseDTO,
    UserListQueryDTO,
    UserPageResponseDTO,
    UserResponseDTO,
    UserStatsResponseDTO,
)
from motoin.entrypoints.http.error_responses import error_responses
from motoin.entrypoints.http.mappers.pagination import to_domain_paging, to_pagination
from motoin.entrypoints.http.mappers.upload_mapper import to_upload
from motoin.entrypoints.http.mappers.user_mapper import UserMapper
from motoin.use_cases.accounts import (
    AuthenticatedUser,
    ChangePassword,
    ChangePasswordRequest,
    LoginRequest,
    LoginUser,
    LogoutUser,
    RegisterRequest,
    RegisterUser,
    UpdateProfile,
    UpdateProfileRequest,
)
from motoin.use_cases.manage_users import (
    CreateUser,
    CreateUserRequest,
    DeleteUser,
    DeleteUserRequest,
    GetUser,
    GetUserStats,
    ListUsers,
    ListUsersRequest,
    UpdateUser,
    UpdateUserRequest,
)
from motoin.use_cases.payment_methods import (
    AddPaymentMethod,
    AddPaymentMethodRequest,
    RemovePaymentMethod,
    RemovePaymentMethodRequest,
    UpdatePaymentMethod,
    UpdatePaymentMethodRequest,
)
from motoin.use_cases.uploads import ReadUploadedFile, RemoveAvatar, UploadAvatar, UploadAvatarRequest

router = APIRouter(prefix="/auth", tags=["Auth"])

AUTH_RESPONSES = error_responses(401)
ADMIN_RESPONSES = error_responses(401, 403, 422)


# ==============================================================================
# Sessions
# ==============================================================================


@router.post(
    "/register",
    response_model=AuthResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer account",
    description="Creates a customer account and returns a bearer token. The role cannot be chosen.",
    responses=error_responses(409, 422),
)
def register(
    body: RegisterRequestDTO,
    use_case: RegisterUser = Depends(get_register_user_use_case),
) -> AuthResponseDTO:
    request = RegisterRequest(
        email=str(body.email),
        password=body.password,
        profile=UserMapper.to_fields(body),
    )
    session = use_case.execute(request)
    return AuthResponseDTO(
        message="Registration successful",
        user=UserMapper.to_user_dto(session.user),
        token=session.token,
        expires_at=session.expires_at,
    )


@router.post(
    "/login",
    response_model=AuthResponseDTO,
    summary="Log in",
    responses=AUTH_RESPONSES,
)
def login(
    body: LoginRequestDTO,
    use_case: LoginUser = Depends(get_login_user_use_case),
) -> AuthResponseDTO:
    session = use_case.execute(LoginRequest(email=body.email, password=body.password))
    return AuthResponseDTO(
        message="Login successful",
        user=UserMapper.to_user_dto(session.user),
        token=session.token,
        expires_at=session.expires_at,
    )


@router.post(
    "/logout",
    response_model=MessageResponseDTO,
    summary="Log out",
    description="Revokes the bearer token used for this request until it would have expired.",
    responses=AUTH_RESPONSES,
)
def logout(
    session: AuthenticatedUser = Depends(get_authenticated_session),
    use_case: LogoutUser = Depends(get_logout_user_use_case),
) -> MessageResponseDTO:
    use_case.execute(session)
    return MessageResponseDTO(message="Logged out")


# ==============================================================================
# Current user
# ==============================================================================


@router.get("/me", response_model=UserResponseDTO, summary="Current user", responses=AUTH_RESPONSES)
def get_me(user: User = Depends(get_current_user)) -> UserResponseDTO:
    return UserResponseDTO(user=UserMapper.to_user_dto(user))


@router.put(
    "/me",
    response_model=UserResponseDTO,
    summary="Update the current user's profile",
    description="Only profile fields are changed; e-mail and role are not editable here.",
    responses=AUTH_RESPONSES,
)
def update_me(
    body: ProfileUpdateDTO,
    user: User = Depends(get_current_user),
    use_case: UpdateProfile = Depends(get_update_profile_use_case),
) -> UserResponseDTO:
    updated = use_case.execute(UpdateProfileRequest(user=user, changes=UserMapper.to_fields(body)))
    return UserResponseDTO(user=UserMapper.to_user_dto(updated))


@router.put(
    "/change-password",
    response_model=MessageResponseDTO,
    summary="Change password",
    responses={**AUTH_RESPONSES, **error_responses(422)},
)
def change_password(
    body: ChangePasswordRequestDTO,
    user: User = Depends(get_current_user),
    use_case: ChangePassword = Depends(get_change_password_use_case),
) -> MessageResponseDTO:
    use_case.execute(
        ChangePasswordRequest(
            user=user,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    )
    return MessageResponseDTO(message="Password changed")


# ==============================================================================
# Avatar
# ==============================================================================


@router.put(
    "/avatar",
    response_model=UserResponseDTO,
    summary="Upload an avatar",
    description="JPEG, PNG, GIF or WebP, at most 2 MB. Replaces the previous avatar.",
    responses={**AUTH_RESPONSES, **error_responses(422)},
)
def upload_avatar(
    avatar: UploadFile = File(...),
    user: User = Depends(get_current_user),
    use_case: UploadAvatar = Depends(get_upload_avatar_use_case),
) -> UserResponseDTO:
    updated = use_case.execute(UploadAvatarRequest(user=user, upload=to_upload(avatar)))
    return UserResponseDTO(user=UserMapper.to_user_dto(updated))


@router.delete(
    "/avatar",
    response_model=UserResponseDTO,
    summary="Remove the avatar",
    responses=AUTH_RESPONSES,
)
def remove_avatar(
    user: User = Depends(get_current_user),
    use_case: RemoveAvatar = Depends(get_remove_avatar_use_case),
) -> UserResponseDTO:
    return UserResponseDTO(user=UserMapper.to_user_dto(use_case.execute(user)))


@router.get(
    "/avatars/{filename}",
    response_class=Response,
    summary="Get an avatar image",
    responses=error_responses(404),
)
def get_avatar(
    filename: str,
    use_case: ReadUploadedFile = Depends(get_read_avatar_use_case),
) -> Response:
    stored = use_case.execute(filename)
    return Response(content=stored.content, media_type=stored.content_type)


# ==============================================================================
# Payment methods
# ==============================================================================


@router.get(
    "/payment-methods",
    response_model=PaymentMethodListResponseDTO,
    summary="List saved payment methods",
    responses=AUTH_RESPONSES,
)
def list_payment_methods(user: User = Depends(get_current_user)) -> PaymentMethodListResponseDTO:
    return PaymentMethodListResponseDTO(
        data=[UserMapper.to_payment_method_dto(method) for method in user.payment_methods]
    )


@router.post(
    "/payment-methods",
    response_model=PaymentMethodListResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Add a payment method",
    description="The first method becomes the default; a new default replaces the previous one.",
    responses={**AUTH_RESPONSES, **error_responses(422)},
)
def add_payment_method(
    body: PaymentMethodWriteDTO,
    user: User = Depends(get_current_user),
    use_case: AddPaymentMethod = Depends(get_add_payment_method_use_case),
) -> PaymentMethodListResponseDTO:
    request = AddPaymentMethodRequest(
        user=user,
        type=UserMapper.to_payment_method_type(body),
        details=UserMapper.to_payment_method_details(body),
    )
    methods = use_case.execute(request)
    return PaymentMethodListResponseDTO(data=[UserMapper.to_payment_method_dto(m) for m in methods])


@router.put(
    "/payment-methods/{method_id}",
    response_model=PaymentMethodListResponseDTO,
    summary="Update a payment method",
    responses={**AUTH_RESPONSES, **error_responses(404)},
)
def update_payment_method(
    method_id: str,
    body: PaymentMethodWriteDTO,
    user: User = Depends(get_current_user),
    use_case: UpdatePaymentMethod = Depends(get_update_payment_method_use_case),
) -> PaymentMethodListResponseDTO:
    request = UpdatePaymentMethodRequest(
        user=user,
        method_id=method_id,
        changes=UserMapper.to_payment_method_changes(body),
    )
    methods = use_case.execute(request)
    return PaymentMethodListResponseDTO(data=[UserMapper.to_payment_method_dto(m) for m in methods])


@router.delete(
    "/payment-methods/{method_id}",
    response_model=PaymentMethodListResponseDTO,
    summary="Remove a payment method",
    responses={**AUTH_RESPONSES, **error_responses(404)},
)
def remove_payment_method(
    method_id: str,
    user: User = Depends(get_current_user),
    use_case: RemovePaymentMethod = Depends(get_remove_payment_method_use_case),
) -> PaymentMethodListResponseDTO:
    methods = use_case.execute(RemovePaymentMethodRequest(user=user, method_id=method_id))
    return PaymentMethodListResponseDTO(data=[UserMapper.to_payment_method_dto(m) for m in methods])


# ==============================================================================
# Admin user management
# ==============================================================================


@router.get(
    "/users",
    response_model=UserPageResponseDTO,
    summary="List users",
    dependencies=[Depends(require_admin)],
    responses=ADMIN_RESPONSES,
)
def list_users(
    query: UserListQueryDTO = Depends(),
    use_case: ListUsers = Depends(get_list_users_use_case),
) -> UserPageResponseDTO:
    request = ListUsersRequest(filters=UserMapper.to_user_filters(query), paging=to_domain_paging(query))
    result = use_case.execute(request)
    return UserPageResponseDTO(
        data=[UserMapper.to_user_dto(user) for user in result.users],
        pagination=to_pagination(request.paging, result.total_count),
    )


@router.get(
    "/users/stats",
    response_model=UserStatsResponseDTO,
    summary="User counts by role and status",
    dependencies=[Depends(require_admin)],
    responses=ADMIN_RESPONSES,
)
def user_stats(use_case: GetUserStats = Depends(get_user_stats_use_case)) -> UserStatsResponseDTO:
    stats = use_case.execute()
    return UserStatsResponseDTO(
        total=stats.total,
        customers=stats.customers,
        admins=stats.admins,
        active=stats.active,
        inactive=stats.inactive,
    )


@router.post(
    "/users",
    response_model=UserDataResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_RESPONSES, **error_responses(409)},
)
def create_user(
    body: AdminUserCreateDTO,
    use_case: CreateUser = Depends(get_create_user_use_case),
) -> UserDataResponseDTO:
    request = CreateUserRequest(
        email=str(body.email),
        password=body.password,
        fields=UserMapper.to_fields(body),
    )
    return UserDataResponseDTO(data=UserMapper.to_user_dto(use_case.execute(request)))


@router.get(
    "/users/{user_id}",
    response_model=UserDataResponseDTO,
    summary="Get a user",
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_RESPONSES, **error_responses(404)},
)
def get_user(user_id: str, use_case: GetUser = Depends(get_get_user_use_case)) -> UserDataResponseDTO:
    return UserDataResponseDTO(data=UserMapper.to_user_dto(use_case.execute(user_id)))


@router.put(
    "/users/{user_id}",
    response_model=UserDataResponseDTO,
    summary="Update a user",
    description="The password is only changed when a new one is sent.",
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_RESPONSES, **error_responses(404, 409)},
)
def update_user(
    user_id: str,
    body: AdminUserUpdateDTO,
    use_case: UpdateUser = Depends(get_update_user_use_case),
) -> UserDataResponseDTO:
    request = UpdateUserRequest(
        user_id=user_id,
        email=str(body.email) if body.email else None,
        password=body.password,
        fields=UserMapper.to_fields(body),
    )
    return UserDataResponseDTO(data=UserMapper.to_user_dto(use_case.execute(request)))


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponseDTO,
    summary="Delete a user",
    description="Admins cannot delete their own account.",
    responses={**ADMIN_RESPONSES, **error_responses(404)},
)
def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    use_case: DeleteUser = Depends(get_delete_user_use_case),
) -> MessageResponseDTO:
    use_case.execute(DeleteUserRequest(actor=admin, user_id=user_id))
    return MessageResponseDTO(message="User deleted")
