# holdings_api/migrate.py
# Database migration module for PostgreSQL and SQLite
# Run: python -m holdings_api.migrate

from typing import Optional

from holdings_api.db import Database, create_database
from holdings_api.tables import metadata


def run_migrations(database: Optional[Database] = None) -> None:
    """
    Create every resource table and index if missing.
    Safe to run multiple times.
    """
    database = database or create_database()
    print("[MIGRATE] Starting database migrations...")

    with database.transaction() as conn:
        metadata.create_all(conn, checkfirst=True)

    for table_name in metadata.tables:
        print(f"[MIGRATE] Ensured {table_name} table and indexes")

    print("[MIGRATE] All migrations complete!")


if __name__ == "__main__":
    run_migrations()
