import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship
from tablemenu.db.base import Base

class AdminMenuItem(Base):
    """Entry of the admin navigation; visibility is granted per role."""

    __tablename__ = "admin_menu_items"

    id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)
    href: Mapped[str] = mapped_column(sa.Text, nullable=False, unique=True)
    icon_name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    title: Mapped[str] = mapped_column(sa.Text, nullable=False)
    description: Mapped[str] = mapped_column(sa.Text, nullable=False, default="", server_default="")
    icon_color: Mapped[str] = mapped_column(sa.Text, nullable=False, default="", server_default="")
    order: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0, server_default="0")
    is_active: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True, server_default=sa.true())

    roles = relationship("Role", secondary="menu_permissions", back_populates="admin_menu_items")


class MenuPermission(Base):
    __tablename__ = "menu_permissions"

    role_id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)
    admin_menu_item_id: Mapped[sa.Uuid] = mapped_column(
        sa.Uuid, sa.ForeignKey("admin_menu_items.id", ondelete="CASCADE"), primary_key=True
    )
