import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column
from tablemenu.db.base import Base

class AuditLog(Base):
    """One admin mutation: who changed which menu entity, and how."""

    __tablename__ = "audit_log"

    id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)
    actor_user_id: Mapped[sa.Uuid | None] = mapped_column(
        sa.Uuid, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    entity_type: Mapped[str] = mapped_column(sa.Text, nullable=False)   # menu_item, category, table_type, user
    entity_id: Mapped[str] = mapped_column(sa.Text, nullable=False)
    action: Mapped[str] = mapped_column(sa.Text, nullable=False)        # created, updated, deleted
    data: Mapped[dict] = mapped_column(sa.JSON, nullable=False, default=dict)
    created_at: Mapped[sa.DateTime] = mapped_column(sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())

    __table_args__ = (
        sa.Index("ix_audit_log_entity", "entity_type", "entity_id"),
        sa.Index("ix_audit_log_actor", "actor_user_id"),
    )
