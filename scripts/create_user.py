#!/usr/bin/env python3
"""
Create a dashboard user who can sign in with credentials.

Usage:
  python scripts/create_user.py <email> <password> [name]
  # Requires POSTGRES_URL and AUTH_SECRET in .env (or export)
"""
import asyncio
import os
import sys

# Load .env from project root
try:
    from dotenv import load_dotenv
    _root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    load_dotenv(os.path.join(_root, ".env"))
except ImportError:
    pass

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.security import get_password_hash
from app.database import AsyncSessionLocal, close_db
from app.models.user import User
from app.services.user_service import UserService


async def create_user(email: str, password: str, name: str) -> bool:
    async with AsyncSessionLocal() as db:
        if await UserService.get_user_by_email(db, email):
            return False
        db.add(User(name=name, email=email, password=get_password_hash(password)))
        await db.commit()
    await close_db()
    return True


def main():
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)
    email, password = sys.argv[1], sys.argv[2]
    name = sys.argv[3] if len(sys.argv) > 3 else email.split("@")[0]
    if asyncio.run(create_user(email, password, name)):
        print(f"SUCCESS: created {email}")
    else:
        print(f"FAILED: a user with email {email} already exists")
        sys.exit(1)


if __name__ == "__main__":
    main()
