"""
Bootstrap a fresh database: ensure the admin account and the store catalog.
Run after migrations: python scripts/seed_data.py
"""

from codemaster.core.database import SessionLocal
from codemaster.services.user_service import user_service
from codemaster.services.store_service import store_service


def main():
    db = SessionLocal()
    try:
        admin = user_service.ensure_admin(db)
        print(f"Admin ready: {admin.email} ({admin.points} points)")

        stats = store_service.reseed_catalog(db)
        print(
            f"Store catalog: {stats['created']} created, "
            f"{stats['updated']} updated, {stats['removed']} removed"
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
