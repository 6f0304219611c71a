#!/usr/bin/env python3
"""
Create the MarketLink schema and optionally load demo data

Usage:
    export DATABASE_URL="postgresql://..."
    python3 backend/scripts/init_db.py
    python3 backend/scripts/init_db.py --seed      # demo supplier, supermarket, products
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / '.env')

from marketlink.core.auth import TokenUser, create_access_token
from marketlink.core.database import Base, get_engine, get_db_connection_dict
from marketlink import models  # noqa: F401  (registers tables on Base.metadata)

DEMO_PRODUCTS = [
    ("Basmati Rice 5kg", "Grains", "Long grain basmati", "2450.00"),
    ("Red Lentils 1kg", "Grains", "Split red lentils", "520.00"),
    ("Coconut Oil 1L", "Oils", "Cold pressed", "1150.00"),
]


def create_schema():
    engine = get_engine()
    Base.metadata.create_all(engine)
    print(f"✅ Tables ready: {', '.join(sorted(Base.metadata.tables))}")


def seed():
    conn = get_db_connection_dict()
    cursor = conn.cursor()

    try:
        cursor.execute("""
            INSERT INTO suppliers (name, contact_email, address)
            VALUES (%s, %s, %s) RETURNING id
        """, ("Lanka Wholesale", "sales@lankawholesale.lk", "12 Harbour Rd, Colombo"))
        supplier_id = cursor.fetchone()['id']

        cursor.execute("""
            INSERT INTO supermarkets (name, contact_email, address)
            VALUES (%s, %s, %s) RETURNING id
        """, ("Fresh Mart Kandy", "orders@freshmart.lk", "45 Temple St, Kandy"))
        supermarket_id = cursor.fetchone()['id']

        for name, category, description, price in DEMO_PRODUCTS:
            cursor.execute("""
                INSERT INTO products (supplier_id, name, category, description, price)
                VALUES (%s, %s, %s, %s, %s)
            """, (supplier_id, name, category, description, price))

        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()
        conn.close()

    print(f"✅ Seeded supplier {supplier_id}, supermarket {supermarket_id}, {len(DEMO_PRODUCTS)} products")
    print()
    print("Supplier token:")
    print(create_access_token(TokenUser(id=supplier_id, email="sales@lankawholesale.lk", role="supplier")))
    print("Supermarket token:")
    print(create_access_token(TokenUser(id=supermarket_id, email="orders@freshmart.lk", role="supermarket")))


def main():
    parser = argparse.ArgumentParser(description="Create MarketLink tables")
    parser.add_argument("--seed", action="store_true", help="Insert demo data and print tokens")
    args = parser.parse_args()

    create_schema()
    if args.seed:
        seed()
    return 0


if __name__ == "__main__":
    sys.exit(main())
