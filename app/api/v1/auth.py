"""JWT login and auth dependencies (get_current_user, require_roles, require_admin)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.audit import ACCESS_DENIED, AuditLogger, get_audit_logger
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import InsufficientPermissions, MissingToken, NotFound
from app.core.roles import Role, authorize
from app.core.security import TokenService, get_token_service
from app.schemas.auth import CurrentUser, DemoCredential, DemoCredentialsData, LoginData, LoginRequest
from app.schemas.common import ErrorResponse, SuccessResponse
from app.scripts.seed_database import DEMO_USERS
from app.services.login import login as run_login
from app.services.user_store import UserStore

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    """Dependency: credential store bound to the request's DB session."""
    return UserStore(db)


@router.post(
    "/login",
    response_model=SuccessResponse[LoginData],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    request: Request,
    store: Annotated[UserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> SuccessResponse[LoginData]:
    """
    Authenticate with email and password; returns an access token and a refresh token.
    Include the access token in the Authorization header as: Bearer <token>
    """
    result = run_login(
        store,
        tokens,
        audit,
        email=body.email,
        password=body.password,
        client_ip=request.client.host if request.client else None,
    )
    return SuccessResponse[LoginData](
        data=LoginData(
            user=result.user,
            token=result.access_token,
            refresh_token=result.refresh_token,
        ),
        message="Login successful",
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the identity it carries.
    Verified on every request from the token alone; raises 401 if missing, invalid or expired.
    """
    if credentials is None or not credentials.credentials:
        raise MissingToken()
    identity = tokens.verify(credentials.credentials)
    return CurrentUser(id=identity.id, email=identity.email, role=identity.role)


def require_roles(*roles: Role) -> Callable[..., CurrentUser]:
    """
    Build a dependency that requires one of `roles`. Raises 403 otherwise.
    With no roles, any authenticated user passes.
    """

    def dependency(
        request: Request,
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        audit: Annotated[AuditLogger, Depends(get_audit_logger)],
    ) -> CurrentUser:
        try:
            authorize(current_user, roles)
        except InsufficientPermissions:
            audit.record(
                ACCESS_DENIED,
                outcome="forbidden",
                user_id=current_user.id,
                role=current_user.role.value,
                path=request.url.path,
            )
            raise
        return current_user

    return dependency


require_admin = require_roles(Role.ADMIN)


@router.post(
    "/demo-credentials",
    response_model=SuccessResponse[DemoCredentialsData],
    responses={404: {"model": ErrorResponse}},
)
def demo_credentials(
    settings: Annotated[Settings, Depends(get_settings)],
) -> SuccessResponse[DemoCredentialsData]:
    """Seeded demo accounts and their passwords. Only served when APP_ENV=dev."""
    if settings.APP_ENV != "dev":
        raise NotFound()
    credentials = [
        DemoCredential(email=demo["email"], password=demo["password"], role=demo["role"])
        for demo in DEMO_USERS
    ]
    return SuccessResponse[DemoCredentialsData](
        data=DemoCredentialsData(credentials=credentials),
        message="Demo credentials for testing",
    )


@router.get("/me", response_model=SuccessResponse[CurrentUser])
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> SuccessResponse[CurrentUser]:
    """Return the identity carried by the presented access token."""
    return SuccessResponse[CurrentUser](data=current_user)
