#!/usr/bin/env python3
"""
Recreate the standard access keys, binding each key pattern to the course whose
title contains its match string. Existing keys with the same key string are
replaced (usage counters restart at 0).

Usage:
    python -m lms_backend.scripts.sync_access_keys --dry-run
    python -m lms_backend.scripts.sync_access_keys --max-uses 100 --expires 2026-12-31
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lms_backend.db.session import SessionLocal
from lms_backend.models import AccessKey, Course

KEY_PATTERNS = [
    ("WEBDESIGN-2024-A1B2", "Web Design"),
    ("WEBDEV-2024-C3D4", "Web development"),
    ("DIGITAL-2024-E5F6", "Digital marketing"),
    ("APPDESIGN-2024-G7H8", "App Design"),
    ("MOBILE-2024-I9J0", "Mobile design"),
    ("GRAPHICS-2024-K1L2", "Graphics Design"),
    ("PYTHON-2024-M3N4", "Python Programming"),
    ("DATASCIENCE-2024-O5P6", "Data Science"),
    ("UIUX-2024-Q7R8", "UI/UX Design"),
    ("FULLSTACK-2024-S9T0", "Full Stack"),
    ("AWS-2024-U1V2", "Cloud Computing"),
    ("ML-2024-W3X4", "Machine Learning"),
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Bind the standard access keys to catalog courses by title",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the key/course pairs without writing")
    parser.add_argument("--max-uses", type=int, default=100, help="Usage cap for each key (0 = unlimited)")
    parser.add_argument("--expires", default="", help="Expiry date YYYY-MM-DD (default: never)")
    return parser.parse_args(argv)


def match_courses(courses: list[Course]) -> list[tuple[str, Course]]:
    """Pair each key with the first course whose title contains the pattern (case-insensitive)."""
    pairs: list[tuple[str, Course]] = []
    for key, title_match in KEY_PATTERNS:
        needle = title_match.lower()
        course = next((c for c in courses if needle in c.title.lower()), None)
        if course is None:
            print(f"No course found matching {title_match!r}; skipping {key}")
            continue
        pairs.append((key, course))
    return pairs


def sync_keys(db: Session, pairs: list[tuple[str, Course]], *, max_uses: int | None, expiry: datetime | None) -> int:
    keys = [key for key, _ in pairs]
    db.execute(delete(AccessKey).where(AccessKey.key.in_(keys)))
    for key, course in pairs:
        db.add(
            AccessKey(
                key=key,
                course_id=course.id,
                expiry_date=expiry,
                max_uses=max_uses,
                current_uses=0,
                is_active=True,
            )
        )
    db.commit()
    return len(pairs)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    expiry = None
    if args.expires:
        try:
            expiry = datetime.strptime(args.expires, "%Y-%m-%d").replace(tzinfo=timezone.utc)
        except ValueError:
            print(f"Error: invalid --expires value: {args.expires}", file=sys.stderr)
            return 2

    with SessionLocal() as db:
        courses = list(db.execute(select(Course).order_by(Course.created_at.asc())).scalars().all())
        print(f"Found {len(courses)} course(s)")
        pairs = match_courses(courses)

        for key, course in pairs:
            print(f"  {key:<24} -> {course.title} ({course.id})")

        if args.dry_run:
            print("\n[dry-run] No changes made.")
            return 0

        count = sync_keys(db, pairs, max_uses=args.max_uses or None, expiry=expiry)

    print(f"\nAccess keys written: {count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
