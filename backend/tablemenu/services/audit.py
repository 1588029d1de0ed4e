"""Audit trail of admin mutations.

Rows are added to the caller's session and committed with the change they
describe, so a rolled back mutation leaves no trace.
"""
from __future__ import annotations

import logging
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.orm import Session

from tablemenu.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def audit(
    db: Session,
    actor_user_id: UUID | None,
    entity_type: str,
    entity_id,
    action: str,
    data: dict | None = None,
) -> AuditLog:
    entry = AuditLog(
        actor_user_id=actor_user_id,
        entity_type=entity_type,
        entity_id=str(entity_id),
        action=action,
        data=dict(data or {}),
    )
    db.add(entry)
    logger.debug("audit %s %s/%s by %s", action, entity_type, entity_id, actor_user_id)
    return entry


def audit_trail(db: Session, entity_type: str, entity_id) -> list[AuditLog]:
    """Entries recorded for one entity, oldest first."""
    stmt = (
        sa.select(AuditLog)
        .where(AuditLog.entity_type == entity_type, AuditLog.entity_id == str(entity_id))
        .order_by(AuditLog.created_at, AuditLog.id)
    )
    return list(db.execute(stmt).scalars())
