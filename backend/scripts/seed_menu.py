from tablemenu.db.session import SessionLocal
from tablemenu.services.bootstrap import seed_demo_menu


def main():
    db = SessionLocal()
    try:
        created = seed_demo_menu(db)
        print(f"ok: demo menu seeded (items={created})")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
