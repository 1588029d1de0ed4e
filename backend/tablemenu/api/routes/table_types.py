from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tablemenu.api.deps import AuthSession, require_admin
from tablemenu.db.session import get_db
from tablemenu.schemas.catalog import TableTypeIn, TableTypeOut
from tablemenu.schemas.common import Envelope, envelope
from tablemenu.services import catalog

router = APIRouter()


@router.get("", response_model=Envelope[list[TableTypeOut]])
def list_table_types(db: Session = Depends(get_db), _: AuthSession = Depends(require_admin)):
    return envelope([TableTypeOut.model_validate(t) for t in catalog.list_table_types(db)])


@router.post("", response_model=Envelope[TableTypeOut], status_code=201)
def create_table_type(
    payload: TableTypeIn,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    table_type = catalog.create_table_type(db, payload, actor_user_id=session.user_id)
    return envelope(TableTypeOut.model_validate(table_type))


@router.put("/{table_type_id}", response_model=Envelope[TableTypeOut])
def update_table_type(
    table_type_id: UUID,
    payload: TableTypeIn,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    table_type = catalog.update_table_type(db, table_type_id, payload, actor_user_id=session.user_id)
    return envelope(TableTypeOut.model_validate(table_type))


@router.delete("/{table_type_id}", response_model=Envelope[None])
def delete_table_type(
    table_type_id: UUID,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_admin),
):
    catalog.delete_table_type(db, table_type_id, actor_user_id=session.user_id)
    return envelope(None)
