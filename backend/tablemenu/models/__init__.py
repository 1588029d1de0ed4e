from tablemenu.models.user import Role, User
from tablemenu.models.admin_menu import AdminMenuItem, MenuPermission
from tablemenu.models.category import Category
from tablemenu.models.table_type import TableType
from tablemenu.models.menu_item import MenuItem, Price
from tablemenu.models.audit_log import AuditLog
