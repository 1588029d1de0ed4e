from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tablemenu.db.session import get_db
from tablemenu.schemas.catalog import CategoryOut, TableTypeOut
from tablemenu.schemas.common import Envelope, envelope
from tablemenu.schemas.menu_item import MenuEntryOut
from tablemenu.services import catalog
from tablemenu.services.menu import project_menu

router = APIRouter()


@router.get("/menu", response_model=Envelope[list[MenuEntryOut]])
def get_menu(
    category: str | None = Query(default=None, max_length=80),
    table_type: str | None = Query(default=None, alias="tableType", max_length=80),
    db: Session = Depends(get_db),
):
    category_name = category.strip() if category else None
    table_type_name = table_type.strip() if table_type else None
    return envelope(project_menu(db, category_name or None, table_type_name or None))


@router.get("/categories", response_model=Envelope[list[CategoryOut]])
def list_categories(db: Session = Depends(get_db)):
    return envelope([CategoryOut.model_validate(c) for c in catalog.list_categories(db)])


@router.get("/table-types", response_model=Envelope[list[TableTypeOut]])
def list_table_types(db: Session = Depends(get_db)):
    return envelope([TableTypeOut.model_validate(t) for t in catalog.list_table_types(db)])
