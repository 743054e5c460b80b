#!/usr/bin/env python3
"""Seed a demo survey with designs and responses.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database and blob directory
2. Uploads placeholder design images
3. Submits sample responses rating every design
"""

from __future__ import annotations

import random
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from designpoll.admin.designs import ImageUpload, upload_design  # noqa: E402
from designpoll.db import repo  # noqa: E402
from designpoll.db.session import init_db, session_scope  # noqa: E402
from designpoll.models.domain import RatingValue, RespondentAttributes  # noqa: E402
from designpoll.storage import LocalBlobStore  # noqa: E402
from designpoll.survey.submission import submit_response  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_BLOB_DIR = PROJECT_ROOT / "demo_blobs"

DEMO_DESIGNS = ["Alpha One", "Beta", "Gamma Wave"]
DEMO_RESPONDENTS = [
    RespondentAttributes(name="Sam", age=31, gender="other", contact="sam@example.com"),
    RespondentAttributes(name="Priya", age=27, gender="female"),
    RespondentAttributes(name="Jordan", age=45, gender="male"),
    RespondentAttributes(name="Sam", age=31, gender="other"),
]

# Smallest valid PNG (1x1 transparent pixel)
PLACEHOLDER_PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


def seed_designs(session, blobs: LocalBlobStore) -> None:
    """Upload demo designs unless some already exist."""
    if repo.count_designs(session) > 0:
        print("Designs already present, skipping upload")
        return
    for name in DEMO_DESIGNS:
        image = ImageUpload(
            filename=f"{name.lower().replace(' ', '_')}.png",
            content_type="image/png",
            data=PLACEHOLDER_PNG,
        )
        design = upload_design(session, blobs, name, image)
        print(f"  Uploaded: {design.name} -> {design.image_ref}")


def seed_responses(session, rng: random.Random) -> None:
    """Submit one complete response per demo respondent."""
    designs = repo.list_designs(session)
    for respondent in DEMO_RESPONDENTS:
        ratings = {
            d.design_id: RatingValue(
                design_quality=rng.randint(1, 5),
                buy_intention=rng.randint(1, 5),
            )
            for d in designs
        }
        result = submit_response(session, respondent, ratings)
        print(f"  Submitted: {respondent.name} ({result.response_id[:8]}...)")


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("designpoll Demo Seeding Script")
    print("=" * 60)

    init_db(DEMO_DB_PATH)
    blobs = LocalBlobStore(DEMO_BLOB_DIR)
    with session_scope(DEMO_DB_PATH) as session:
        print("\n[1/2] Uploading designs...")
        seed_designs(session, blobs)

        print("\n[2/2] Submitting responses...")
        seed_responses(session, random.Random(42))

    print("\n" + "=" * 60)
    print("Demo seeding complete!")
    print(f"Database: {DEMO_DB_PATH}")
    print(f"Blobs: {DEMO_BLOB_DIR}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
