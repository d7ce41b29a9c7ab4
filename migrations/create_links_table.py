"""
Migration Helper: create the `links` table

Creates the table, its unique short code constraint and the owner index if
they do not exist yet. Safe to run more than once.

Usage:
    DATABASE_URL=... SECRET_KEY=... BASE_URL=... python migrations/create_links_table.py
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from shortlinks import create_app
from shortlinks.config import Config
from shortlinks.extensions import db
from shortlinks.models.link import Link


class MigrationConfig(Config):
    AUTO_CREATE_TABLES = False
    REDIS_URL = None


def run_migration():
    app = create_app(MigrationConfig)

    with app.app_context():
        print("=" * 60)
        print("Starting migration: links table")
        print("=" * 60)

        existing = inspect(db.engine).get_table_names()
        if Link.__tablename__ in existing:
            print(f"\n✓ Table '{Link.__tablename__}' already exists, nothing to do")
            return True

        try:
            Link.__table__.create(bind=db.engine)
        except SQLAlchemyError as e:
            print(f"\n❌ Migration failed: {e}")
            return False

        print(f"\n✓ Created table '{Link.__tablename__}'")
        print("=" * 60)
        return True


if __name__ == "__main__":
    sys.exit(0 if run_migration() else 1)
