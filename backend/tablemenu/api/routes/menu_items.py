from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tablemenu.api.deps import AuthSession, require_admin
from tablemenu.core.config import settings
from tablemenu.db.session import get_db
from tablemenu.schemas.common import Envelope, envelope
from tablemenu.schemas.menu_item import MenuItemIn, MenuItemOut, MenuItemPageOut, PaginationOut, menu_item_out
from tablemenu.services import pricing

router = APIRouter()


@router.get("", response_model=Envelope[MenuItemPageOut])
def list_menu_items(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=settings.MENU_ITEMS_MAX_PAGE_SIZE),
    category_id: UUID | None = Query(default=None),
    search: str | None = Query(default=None, max_length=100),
    db: Session = Depends(get_db),
    _: AuthSession = Depends(require_admin),
):
    result = pricing.list_menu_items(db, page=page, limit=limit, category_id=category_id, search=search)
    return envelope(
        MenuItemPageOut(
            items=[menu_item_out(item) for item in result.items],
            pagination=PaginationOut(**result.pagination()),
        )
    )


@router.get("/{item_id}", response_model=Envelope[MenuItemOut])
def get_menu_item(item_id: UUID, db: Session = Depends(get_db), _: AuthSession = Depends(require_admin)):
    return envelope(menu_item_out(pricing.get_menu_item(db, item_id)))


@router.post("", response_model=Envelope[MenuItemOut], status_code=201)
def create_menu_item(
    payload: MenuItemIn,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    item = pricing.create_menu_item(db, payload, actor_user_id=session.user_id)
    return envelope(menu_item_out(item))


@router.put("/{item_id}", response_model=Envelope[MenuItemOut])
def update_menu_item(
    item_id: UUID,
    payload: MenuItemIn,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    item = pricing.update_menu_item(db, item_id, payload, actor_user_id=session.user_id)
    return envelope(menu_item_out(item))


@router.delete("/{item_id}", response_model=Envelope[None])
def delete_menu_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    pricing.delete_menu_item(db, item_id, actor_user_id=session.user_id)
    return envelope(None)
