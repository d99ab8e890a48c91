from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lms_backend.models import AccessKey, Course, User, UserCourseAccess
from lms_backend.schemas.admin import DashboardStats


def dashboard_stats(db: Session) -> DashboardStats:
    role_counts = dict(db.execute(select(User.role, func.count()).group_by(User.role)).all())
    total_users = sum(role_counts.values())
    total_courses = db.execute(select(func.count()).select_from(Course)).scalar_one()
    # Course.students is the catalog's advertised enrollment figure
    total_enrollments = db.execute(select(func.coalesce(func.sum(Course.students), 0))).scalar_one()
    total_access_keys = db.execute(select(func.count()).select_from(AccessKey)).scalar_one()
    total_redemptions = db.execute(select(func.count()).select_from(UserCourseAccess)).scalar_one()

    return DashboardStats(
        total_users=total_users,
        students=role_counts.get("student", 0),
        instructors=role_counts.get("instructor", 0),
        admins=role_counts.get("admin", 0),
        total_courses=total_courses,
        total_enrollments=int(total_enrollments),
        total_access_keys=total_access_keys,
        total_redemptions=total_redemptions,
    )


def recent_activities(db: Session, limit: int = 10) -> tuple[list[User], list[Course]]:
    users = db.execute(select(User).order_by(User.created_at.desc()).limit(limit)).scalars().all()
    courses = db.execute(select(Course).order_by(Course.created_at.desc()).limit(limit)).scalars().all()
    return list(users), list(courses)
