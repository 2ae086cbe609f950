"""
Seed a demo account with one public outfit.

Run this from the repository root:

    (.venv) python scripts/seed_demo.py

It creates the tables if needed, then a demo user (skipped if the email is
already registered) owning a public outfit with a few items, so the public
feed has something to show.
"""

import logging

from sqlalchemy import select

from unpacked.core.logging import configure_logging
from unpacked.core.security import hash_password
from unpacked.db.init_db import init_db
from unpacked.db.session import SessionLocal
from unpacked.models.outfit import ItemCategory, Outfit, OutfitItem
from unpacked.models.user import User

logger = logging.getLogger("seed_demo")

DEMO_EMAIL = "bob@example.com"
DEMO_NAME = "Bob Smith"
DEMO_PASSWORD = "password123"

DEMO_OUTFIT = {
    "name": "Monochrome Layers",
    "description": "Black tailoring over soft knits, finished with loafers.",
    "tags": ["minimal", "monochrome", "casual"],
    "items": [
        ("Structured Wool Overcoat", ItemCategory.OUTERWEAR),
        ("Fluid Silk Button-Up", ItemCategory.UPPERWEAR),
        ("Tapered Black Trousers", ItemCategory.LOWERWEAR),
        ("Minimalist Loafers", ItemCategory.FOOTWEAR),
    ],
}


def main() -> None:
    configure_logging()
    init_db()

    db = SessionLocal()
    try:
        existing = db.scalars(select(User).where(User.email == DEMO_EMAIL)).first()
        if existing:
            logger.info("Demo user %s already exists, nothing to do", DEMO_EMAIL)
            return

        user = User(
            email=DEMO_EMAIL,
            name=DEMO_NAME,
            password_hash=hash_password(DEMO_PASSWORD),
        )
        user.outfits.append(
            Outfit(
                name=DEMO_OUTFIT["name"],
                description=DEMO_OUTFIT["description"],
                tags=DEMO_OUTFIT["tags"],
                is_private=False,
                items=[
                    OutfitItem(name=name, category=category)
                    for name, category in DEMO_OUTFIT["items"]
                ],
            )
        )
        db.add(user)
        db.commit()
        logger.info("Created demo user %s with outfit %r", DEMO_EMAIL, DEMO_OUTFIT["name"])
    finally:
        db.close()


if __name__ == "__main__":
    main()
