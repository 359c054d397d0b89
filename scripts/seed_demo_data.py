#!/usr/bin/env python3
"""Seed demo data.

Creates a demo admin, a second user and a handful of microposts in the main
database. Running it again clears the demo users and re-seeds them.

Usage:
    DATABASE_URL=sqlite:///./sample_app.db python scripts/seed_demo_data.py
"""

import os
import sys
from datetime import UTC, datetime, timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sample_app.database import SessionLocal, init_db
from sample_app.models import Micropost
from sample_app.services.users import create_user, delete_user, get_user_by_email, toggle_admin

DEMO_USERS = [
    ("Example User", "example@railstutorial.org", "foobar"),
    ("Second User", "second@example.com", "foobar"),
]

DEMO_POSTS = [
    "Just signed up.",
    "Trying out microposts.",
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
]


def seed_demo_data():
    """Seed the database with demo users and microposts."""
    init_db()
    session = SessionLocal()

    try:
        now = datetime.now(UTC)
        for index, (name, email, password) in enumerate(DEMO_USERS):
            existing_user = get_user_by_email(session, email)
            if existing_user:
                print(f"Clearing existing demo user {email}...")
                delete_user(session, existing_user)

            print(f"Creating demo user {email}...")
            user = create_user(session, name, email, password, password)
            if index == 0:
                toggle_admin(session, user)

            session.add_all(
                Micropost(content=content, user_id=user.id, created_at=now - timedelta(hours=n))
                for n, content in enumerate(DEMO_POSTS)
            )
            session.commit()

        print("Demo data seeded.")
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()
