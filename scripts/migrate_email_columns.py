"""Add columns introduced after the first deployment to existing tables.

create_all never alters tables that already exist, so databases created
before these columns need this once.
"""

import os
import sys

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import inspect, text

from vininfo.infrastructure.database import engine

NEW_COLUMNS = (
    ("users", "email_verification_sent_at", "TIMESTAMP WITH TIME ZONE"),
    ("reminders", "email_claimed_at", "TIMESTAMP WITH TIME ZONE"),
)


def migrate():
    inspector = inspect(engine)
    with engine.begin() as conn:
        for table, column, ddl_type in NEW_COLUMNS:
            existing = {c["name"] for c in inspector.get_columns(table)}
            if column in existing:
                print(f"Column '{table}.{column}' already exists.")
                continue
            print(f"Adding '{table}.{column}'...")
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl_type}"))
    print("Migration finished.")


if __name__ == "__main__":
    migrate()
