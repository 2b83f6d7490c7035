"""
rbac_platform.db.base

Shared ORM mixins and audit-field population.

Responsibilities:
- Timestamp mixin (`created_at` / `updated_at`).
- Audit mixin (`created_by` / `updated_by`) filled from the session's actor.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import String, event
from sqlalchemy.orm import Mapped, Session, mapped_column

SYSTEM_ACTOR = "system"
ACTOR_KEY = "actor"


def utcnow() -> datetime:
    # Columns hold naive UTC.
    return datetime.now(UTC).replace(tzinfo=None)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)


class AuditMixin(TimestampMixin):
    created_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(64), nullable=True)


@event.listens_for(Session, "before_flush")
def _populate_audit_fields(session: Session, flush_context: Any, instances: Any) -> None:
    # The request-scoped session carries the authenticated user id (see api.deps.db_session).
    actor = session.info.get(ACTOR_KEY) or SYSTEM_ACTOR
    for obj in session.new:
        if isinstance(obj, AuditMixin):
            obj.created_by = obj.created_by or actor
            obj.updated_by = actor
    for obj in session.dirty:
        if isinstance(obj, AuditMixin) and session.is_modified(obj):
            obj.updated_by = actor


# --- Module Notes -----------------------------------------------------------
# Listening on the sync `Session` class covers AsyncSession too, since AsyncSession
# delegates flushes to its underlying sync session.
