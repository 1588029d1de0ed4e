import argparse
import getpass

from tablemenu.core.config import settings
from tablemenu.db.session import SessionLocal
from tablemenu.services.bootstrap import ensure_admin_access


def main():
    parser = argparse.ArgumentParser(description="Create the admin role, its navigation and an admin user.")
    parser.add_argument("--username", default=settings.BOOTSTRAP_ADMIN_USERNAME)
    args = parser.parse_args()

    username = args.username or input("admin username: ").strip()
    password = settings.BOOTSTRAP_ADMIN_PASSWORD or getpass.getpass("admin password: ")
    if len(password) < 6:
        raise SystemExit("password must be at least 6 characters")

    db = SessionLocal()
    try:
        user = ensure_admin_access(db, username, password)
        print(f"ok: admin access ready (user={user.username})")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
