"""
Login flow: credential check and token issuance.

Steps run in a fixed order and each one can end the flow:
input check, lookup by email, active check, password check, last-login
update (best effort), token issuance. Unknown email and wrong password fail
with the same InvalidCredentials error. A deactivated account fails with its
own AccountDeactivated error, which does reveal that the email is registered.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from app.core.audit import LOGIN_FAILED, LOGIN_SUCCEEDED, AuditLogger
from app.core.errors import AccountDeactivated, BadRequest, InvalidCredentials
from app.core.security import TokenService, verify_password
from app.schemas.auth import UserSummary
from app.services.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user: UserSummary
    access_token: str
    refresh_token: str


def login(
    store: UserStore,
    tokens: TokenService,
    audit: AuditLogger,
    email: str | None,
    password: str | None,
    client_ip: str | None = None,
) -> LoginResult:
    """Authenticate email/password and issue an access and a refresh token."""
    if not email or not password:
        audit.record(LOGIN_FAILED, outcome="bad_request", email=email or "", ip=client_ip)
        raise BadRequest("Email and password are required")

    user = store.find_by_email_with_hash(email)
    if user is None:
        audit.record(LOGIN_FAILED, outcome="unknown_email", email=email, ip=client_ip)
        raise InvalidCredentials()

    if not user.is_active:
        audit.record(LOGIN_FAILED, outcome="deactivated", email=email, user_id=user.id, ip=client_ip)
        raise AccountDeactivated()

    if not verify_password(password, user.password_hash):
        audit.record(LOGIN_FAILED, outcome="wrong_password", email=email, user_id=user.id, ip=client_ip)
        raise InvalidCredentials()

    summary = UserSummary(id=user.id, email=user.email, role=user.role)
    try:
        store.update_last_login(summary.id, datetime.now(UTC))
    except Exception:
        logger.warning("Could not record last login", extra={"user_id": summary.id}, exc_info=True)

    access_token = tokens.issue_access_token(summary.id, summary.email, summary.role)
    refresh_token = tokens.issue_refresh_token(summary.id)
    audit.record(LOGIN_SUCCEEDED, outcome="success", email=summary.email, user_id=summary.id, ip=client_ip)
    return LoginResult(user=summary, access_token=access_token, refresh_token=refresh_token)
