"""User endpoints: own profile for any user; listing and CRUD for admins."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.auth import get_current_user, get_user_store, require_admin
from app.core.audit import USER_CREATED, USER_DELETED, USER_UPDATED, AuditLogger, get_audit_logger
from app.core.errors import NotFound
from app.schemas.auth import CurrentUser
from app.schemas.common import PaginatedData, PaginationInfo, SuccessResponse
from app.schemas.user import DashboardStats, RoleCounts, UserCreate, UserDashboard, UserOut, UserUpdate
from app.services import users as user_service
from app.services.user_store import UserStore

router = APIRouter()


@router.get("/profile", response_model=SuccessResponse[UserOut])
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> SuccessResponse[UserOut]:
    """Return the stored profile of the authenticated user."""
    user = store.find_by_id(current_user.id)
    if user is None:
        raise NotFound("User not found")
    return SuccessResponse[UserOut](
        data=UserOut.model_validate(user),
        message="Profile retrieved successfully",
    )


@router.get("/dashboard", response_model=SuccessResponse[UserDashboard])
def get_dashboard(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> SuccessResponse[UserDashboard]:
    """Own profile with last login time and account age."""
    user = store.find_by_id(current_user.id)
    if user is None:
        raise NotFound("User not found")
    dashboard = UserDashboard(
        user=UserOut.model_validate(user),
        stats=DashboardStats(
            last_login_at=user.last_login_at,
            account_age_days=user_service.account_age_days(user.created_at),
        ),
    )
    return SuccessResponse[UserDashboard](
        data=dashboard,
        message="Dashboard data retrieved successfully",
    )


@router.get("", response_model=SuccessResponse[PaginatedData[UserOut]])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=user_service.MAX_PAGE_SIZE)] = user_service.DEFAULT_PAGE_SIZE,
) -> SuccessResponse[PaginatedData[UserOut]]:
    """List users newest first (admin only)."""
    result = user_service.list_users(store, page=page, limit=limit)
    return SuccessResponse[PaginatedData[UserOut]](
        data=PaginatedData[UserOut](
            items=[UserOut.model_validate(u) for u in result.users],
            pagination=PaginationInfo(
                page=result.page,
                limit=result.limit,
                total=result.total,
                total_pages=result.total_pages,
            ),
        ),
        message="Users retrieved successfully",
    )


@router.post("", response_model=SuccessResponse[UserOut], status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> SuccessResponse[UserOut]:
    """Create a user (admin only). 409 if the email is already registered."""
    user = user_service.register_user(
        store,
        email=body.email,
        name=body.name,
        password=body.password,
        role=body.role,
        is_active=body.is_active,
    )
    audit.record(USER_CREATED, actor_id=admin.id, user_id=user.id, role=user.role)
    return SuccessResponse[UserOut](data=UserOut.model_validate(user), message="User created")


@router.get("/stats", response_model=SuccessResponse[RoleCounts])
def get_user_stats(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> SuccessResponse[RoleCounts]:
    """User counts per role (admin only)."""
    return SuccessResponse[RoleCounts](data=RoleCounts(**store.count_by_role()))


@router.get("/{user_id}", response_model=SuccessResponse[UserOut])
def get_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> SuccessResponse[UserOut]:
    user = user_service.get_user(store, user_id)
    return SuccessResponse[UserOut](data=UserOut.model_validate(user))


@router.patch("/{user_id}", response_model=SuccessResponse[UserOut])
def update_user(
    user_id: int,
    body: UserUpdate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> SuccessResponse[UserOut]:
    """Update name, role, active flag or password (admin only)."""
    user = user_service.update_user(
        store,
        user_id,
        name=body.name,
        role=body.role,
        is_active=body.is_active,
        password=body.password,
    )
    audit.record(
        USER_UPDATED,
        actor_id=admin.id,
        user_id=user.id,
        fields=",".join(sorted(body.model_dump(exclude_none=True))),
    )
    return SuccessResponse[UserOut](data=UserOut.model_validate(user), message="User updated")


@router.delete("/{user_id}", response_model=SuccessResponse[None])
def delete_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> SuccessResponse[None]:
    """Delete a user (admin only). Admins cannot delete themselves."""
    user_service.delete_user(store, user_id, acting_user_id=admin.id)
    audit.record(USER_DELETED, actor_id=admin.id, user_id=user_id)
    return SuccessResponse[None](data=None, message="User deleted")
