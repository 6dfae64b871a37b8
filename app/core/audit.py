"""
Security audit trail.

Events go to a dedicated 'app.audit' logger as one line each, with the event
attributes attached via `extra` so a JSON/handler-based sink can pick them up.
Recording an event never raises: auditing must not change the outcome of the
request that produced it.
"""

import logging
from typing import Any

# Attribute names that are never written to the audit trail.
REDACTED_KEYS = frozenset({"password", "password_hash", "token", "refresh_token"})

LOGIN_SUCCEEDED = "auth.login.succeeded"
LOGIN_FAILED = "auth.login.failed"
ACCESS_DENIED = "auth.access.denied"
USER_CREATED = "users.created"
USER_UPDATED = "users.updated"
USER_DELETED = "users.deleted"


class AuditLogger:
    """Accepts (event, attributes) and writes them to the audit logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("app.audit")

    def record(self, event: str, **attributes: Any) -> None:
        """Record a security-relevant event. Returns immediately and never raises."""
        try:
            safe = {k: v for k, v in attributes.items() if k not in REDACTED_KEYS}
            level = logging.INFO if attributes.get("outcome", "success") == "success" else logging.WARNING
            details = " ".join(f"{k}={v}" for k, v in sorted(safe.items()))
            self.logger.log(
                level,
                "%s %s",
                event,
                details,
                extra={"audit_event": event, "audit": safe},
            )
        except Exception:
            pass


_audit_logger = AuditLogger()


def get_audit_logger() -> AuditLogger:
    """Dependency returning the shared audit logger."""
    return _audit_logger
