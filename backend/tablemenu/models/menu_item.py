import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship
from tablemenu.db.base import Base

class MenuItem(Base):
    __tablename__ = "menu_items"

    id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    description: Mapped[str] = mapped_column(sa.Text, nullable=False, default="", server_default="")
    image: Mapped[str] = mapped_column(sa.Text, nullable=False, default="", server_default="")
    category_id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, sa.ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)
    is_cook: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=False, server_default=sa.false())
    created_at: Mapped[sa.DateTime] = mapped_column(sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
    updated_at: Mapped[sa.DateTime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(), onupdate=sa.func.now()
    )

    __table_args__ = (
        sa.UniqueConstraint("name", "category_id", name="uq_menu_items_name_category"),
        sa.Index("ix_menu_items_category", "category_id"),
    )

    category = relationship("Category", back_populates="menu_items")
    prices = relationship(
        "Price",
        back_populates="menu_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Price(Base):
    __tablename__ = "prices"

    id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)
    menu_item_id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, sa.ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)
    table_type_id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, sa.ForeignKey("table_types.id", ondelete="RESTRICT"), nullable=False)
    amount: Mapped[float] = mapped_column(sa.Numeric(10, 2, asdecimal=False), nullable=False)

    __table_args__ = (
        # One price per (menu item, table type); the pricing service relies on it.
        sa.UniqueConstraint("menu_item_id", "table_type_id", name="uq_prices_menu_item_table_type"),
        sa.CheckConstraint("amount >= 0", name="ck_prices_amount_non_negative"),
        sa.Index("ix_prices_table_type", "table_type_id"),
    )

    menu_item = relationship("MenuItem", back_populates="prices")
    table_type = relationship("TableType")
