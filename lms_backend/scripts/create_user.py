"""
Create or update a user with a given role, optionally enrolling them in a course.

Usage:
    python -m lms_backend.scripts.create_user --email admin@example.com --password secret123 --role admin
    python -m lms_backend.scripts.create_user --email jo@example.com --password secret123 --course-id <id>
"""

from __future__ import annotations

import argparse
import sys

from sqlalchemy import select

from lms_backend.core.security import hash_password
from lms_backend.db.session import SessionLocal
from lms_backend.models import Course, User

ROLES = ("student", "instructor", "admin")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or update a user for local/dev use.")
    parser.add_argument("--email", required=True, help="User email")
    parser.add_argument("--password", required=True, help="Plain password (will be hashed)")
    parser.add_argument("--name", default="", help="Display name (defaults to the email local part)")
    parser.add_argument("--role", default="student", choices=ROLES)
    parser.add_argument("--course-id", default="", help="Optional course id to add to enrolledCourses")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    email = args.email.strip().lower()
    name = args.name.strip() or email.split("@")[0]
    course_id = args.course_id.strip()

    if len(args.password) < 6:
        print("Error: password must be at least 6 characters", file=sys.stderr)
        return 2

    with SessionLocal() as db:
        user = db.execute(select(User).where(User.email == email)).scalars().first()
        created = False
        if not user:
            user = User(
                email=email,
                name=name,
                password_hash=hash_password(args.password),
                role=args.role,
                cart=[],
                enrolled_courses=[],
            )
            db.add(user)
            db.flush()
            created = True
        else:
            user.name = name
            user.password_hash = hash_password(args.password)
            user.role = args.role

        enrolled = False
        if course_id:
            if not db.get(Course, course_id):
                print(f"Error: course not found: {course_id}", file=sys.stderr)
                db.rollback()
                return 3
            current = list(user.enrolled_courses or [])
            if course_id not in current:
                user.enrolled_courses = [*current, course_id]
                enrolled = True

        db.commit()

    print(
        {
            "ok": True,
            "created": created,
            "email": email,
            "name": name,
            "role": args.role,
            "course_id": course_id or None,
            "enrolled": enrolled,
        }
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
