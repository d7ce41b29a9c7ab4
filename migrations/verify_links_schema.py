"""
Verification Script: check the `links` table against the model

Reports missing columns, nullability mismatches and whether the short code
uniqueness constraint is in place.
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sqlalchemy import inspect

from shortlinks import create_app
from shortlinks.config import Config
from shortlinks.extensions import db
from shortlinks.models.link import Link

EXPECTED_COLUMNS = {
    "id": False,
    "user_id": False,
    "original_url": False,
    "short_code": False,
    "created_at": False,
    "updated_at": False,
}


class VerifyConfig(Config):
    AUTO_CREATE_TABLES = False
    REDIS_URL = None


def verify_schema():
    app = create_app(VerifyConfig)
    problems = []

    with app.app_context():
        insp = inspect(db.engine)

        if Link.__tablename__ not in insp.get_table_names():
            print(f"❌ Table '{Link.__tablename__}' does not exist")
            return False

        columns = {c["name"]: c for c in insp.get_columns(Link.__tablename__)}
        for name, nullable in EXPECTED_COLUMNS.items():
            column = columns.get(name)
            if column is None:
                problems.append(f"missing column '{name}'")
            elif column["nullable"] != nullable:
                problems.append(f"column '{name}' nullable={column['nullable']}")

        unique_sets = [tuple(u["column_names"]) for u in insp.get_unique_constraints(Link.__tablename__)]
        unique_sets += [
            tuple(i["column_names"])
            for i in insp.get_indexes(Link.__tablename__)
            if i.get("unique")
        ]
        if ("short_code",) not in unique_sets:
            problems.append("short_code is not unique")

        count = Link.query.count()

    print("=" * 60)
    print(f"Links table: {count} rows")
    if problems:
        for problem in problems:
            print(f"❌ {problem}")
    else:
        print("✓ Schema matches the model")
    print("=" * 60)
    return not problems


if __name__ == "__main__":
    sys.exit(0 if verify_schema() else 1)
