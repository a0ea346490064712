"""
Check the PostgreSQL database for CodeMaster.
Run once before `alembic upgrade head`: python scripts/init_postgres.py

Requires: PostgreSQL installed and running. Create user and database:

  sudo -u postgres psql
  CREATE USER codemaster WITH PASSWORD 'codemaster';
  CREATE DATABASE codemaster_db OWNER codemaster;
  GRANT ALL PRIVILEGES ON DATABASE codemaster_db TO codemaster;
  \q
"""

import sys

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from codemaster.config import settings


def main():
    url = settings.get_database_url()
    if not url.startswith("postgresql"):
        print("Database URL is not PostgreSQL. Skipping.")
        return
    try:
        engine = create_engine(url)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print(f"PostgreSQL connection OK. Database {settings.POSTGRES_DB} exists.")
    except SQLAlchemyError as e:
        print(f"Cannot connect to PostgreSQL: {e}")
        print("\nCreate database first:")
        print("  psql -U postgres -c \"CREATE USER codemaster WITH PASSWORD 'codemaster';\"")
        print("  psql -U postgres -c \"CREATE DATABASE codemaster_db OWNER codemaster;\"")
        print("  psql -U postgres -c \"GRANT ALL PRIVILEGES ON DATABASE codemaster_db TO codemaster;\"")
        sys.exit(1)


if __name__ == "__main__":
    main()
