from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tablemenu.api.deps import AuthSession, require_admin
from tablemenu.db.session import get_db
from tablemenu.schemas.catalog import CategoryIn, CategoryOut
from tablemenu.schemas.common import Envelope, envelope
from tablemenu.services import catalog

router = APIRouter()


@router.get("", response_model=Envelope[list[CategoryOut]])
def list_categories(db: Session = Depends(get_db), _: AuthSession = Depends(require_admin)):
    return envelope([CategoryOut.model_validate(c) for c in catalog.list_categories(db)])


@router.post("", response_model=Envelope[CategoryOut], status_code=201)
def create_category(
    payload: CategoryIn,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    category = catalog.create_category(db, payload, actor_user_id=session.user_id)
    return envelope(CategoryOut.model_validate(category))


@router.put("/{category_id}", response_model=Envelope[CategoryOut])
def update_category(
    category_id: UUID,
    payload: CategoryIn,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    category = catalog.update_category(db, category_id, payload, actor_user_id=session.user_id)
    return envelope(CategoryOut.model_validate(category))


@router.delete("/{category_id}", response_model=Envelope[None])
def delete_category(
    category_id: UUID,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    catalog.delete_category(db, category_id, actor_user_id=session.user_id)
    return envelope(None)
