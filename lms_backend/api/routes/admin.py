from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lms_backend.api.deps import require_roles
from lms_backend.db.session import get_db
from lms_backend.schemas.admin import DashboardStatsData, RecentActivitiesData
from lms_backend.schemas.auth import UserOut
from lms_backend.schemas.common import ApiResponse
from lms_backend.schemas.courses import CourseOut
from lms_backend.services.admin_service import dashboard_stats, recent_activities

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_roles("admin"))])


@router.get("/dashboard/stats", response_model=ApiResponse[DashboardStatsData])
def get_dashboard_stats(db: Session = Depends(get_db)) -> ApiResponse[DashboardStatsData]:
    return ApiResponse(data=DashboardStatsData(stats=dashboard_stats(db)))


@router.get("/dashboard/activities", response_model=ApiResponse[RecentActivitiesData])
def get_recent_activities(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
) -> ApiResponse[RecentActivitiesData]:
    users, courses = recent_activities(db, limit=limit)
    return ApiResponse(
        data=RecentActivitiesData(
            recent_users=[UserOut.model_validate(user) for user in users],
            recent_courses=[CourseOut.model_validate(course) for course in courses],
        )
    )
