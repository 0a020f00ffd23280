#!/usr/bin/env python3
# scripts/setup_database.py
"""
Database setup script
- Verifies database connection
- Creates stables, campaigns, goals and channels tables
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.db.session import test_db_connection, init_db
from app.core.config import DATABASE_URL


def setup():
    print("=" * 70)
    print("🚀 CAMPAIGN MANAGEMENT DATABASE SETUP")
    print("=" * 70)

    # Step 1: Test connection
    print("\n1️⃣  Testing database connection...")
    print(f"   Database: {DATABASE_URL.split('@')[1] if '@' in DATABASE_URL else DATABASE_URL}")

    if not test_db_connection():
        print("   ❌ Database connection failed!")
        print("   Please check:")
        print("   - PostgreSQL is running")
        print("   - Database exists")
        print("   - .env configuration is correct")
        return 1
    print("   ✅ Database connected successfully")

    # Step 2: Create tables
    print("\n2️⃣  Creating tables...")
    try:
        init_db()
    except Exception as e:
        print(f"   ❌ Table creation failed: {e}")
        return 1
    print("   ✅ Tables ready")

    print("\n" + "=" * 70)
    print("✅ Setup complete")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(setup())
