#!/usr/bin/env python3
"""Seed demo users into the storage document.

Replaces any existing demo users (matched by email) and keeps everyone else.

Usage:
    # From project root:
    python scripts/seed_demo_data.py

    # Or against another document:
    USERS_FILE=/tmp/users.json python scripts/seed_demo_data.py
"""

import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config import get_settings
from src.models.user import User
from src.services import user_repository
from src.services.passwords import get_password_hash
from src.services.storage import JsonFileUserStorage

# Demo user credentials
DEMO_PASSWORD = "demopass123"
DEMO_USERS = [
    ("Demo User", "demo@example.com", "https://example.com/avatars/demo.png"),
    ("Ann Example", "ann@example.com", ""),
    ("Bob Example", "bob@example.com", ""),
]


async def seed_demo_data() -> None:
    """Write the demo users into the configured storage document."""
    settings = get_settings()
    storage = JsonFileUserStorage(settings.users_file)

    demo_emails = {email for _, email, _ in DEMO_USERS}
    users = [user for user in await storage.load() if user.email not in demo_emails]
    kept = len(users)

    for name, email, picture in DEMO_USERS:
        hashed = get_password_hash(DEMO_PASSWORD)
        user_repository.insert(
            users,
            User(
                id=user_repository.generate_id(users),
                name=name,
                email=email,
                password=hashed,
                profile_picture_url=picture,
            ),
        )

    if not await storage.save(users):
        print(f"Failed to write {settings.users_file}")
        sys.exit(1)

    print(f"Seeded {len(DEMO_USERS)} demo users into {settings.users_file} ({kept} existing kept)")
    print(f"Demo password: {DEMO_PASSWORD}")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
