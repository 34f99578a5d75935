# scripts/init_db.py
"""
Script to initialize database tables. Run from project root:
    python scripts/init_db.py
"""
from classgroups.infrastructure.db.session import init_db

if __name__ == "__main__":
    init_db()
    print("DB initialized")
