from lms_backend.schemas.auth import UserOut
from lms_backend.schemas.common import CamelModel
from lms_backend.schemas.courses import CourseOut


class DashboardStats(CamelModel):
    total_users: int
    students: int
    instructors: int
    admins: int
    total_courses: int
    total_enrollments: int
    total_access_keys: int
    total_redemptions: int


class DashboardStatsData(CamelModel):
    stats: DashboardStats


class RecentActivitiesData(CamelModel):
    recent_users: list[UserOut]
    recent_courses: list[CourseOut]
