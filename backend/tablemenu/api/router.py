from fastapi import APIRouter
from tablemenu.api.routes import auth, categories, images, menu, menu_items, navigation, table_types, users

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(menu.router, prefix="", tags=["menu"])
router.include_router(categories.router, prefix="/admin/categories", tags=["admin"])
router.include_router(table_types.router, prefix="/admin/table-types", tags=["admin"])
router.include_router(menu_items.router, prefix="/admin/menu-items", tags=["admin"])
router.include_router(navigation.router, prefix="/admin/menu-items-permissions", tags=["admin"])
router.include_router(users.router, prefix="/admin/users", tags=["admin"])
router.include_router(users.roles_router, prefix="/admin/roles", tags=["admin"])
router.include_router(images.router, prefix="/admin/images", tags=["admin"])
