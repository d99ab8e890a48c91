import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from lms_backend.api.routes import access_keys, admin, auth, cart, course_content, courses, notices, users
from lms_backend.core.config import DEFAULT_JWT_SECRET, get_settings
from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import ApiError
from lms_backend.core.logging_config import configure_logging
from lms_backend.core.security import now_utc
from lms_backend.db.session import close_db, init_db

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if settings.is_production and settings.jwt_secret == DEFAULT_JWT_SECRET:
        raise RuntimeError("JWT_SECRET must be set in production")

    try:
        init_db()
    except SQLAlchemyError as exc:
        raise RuntimeError("Database schema is not ready. Run: alembic upgrade head") from exc
    logger.info("%s started (env=%s)", settings.app_name, settings.app_env)
    yield
    close_db()


app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

Path(settings.uploads_dir).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")


def _error_body(message: str, **extra) -> dict:
    return {"status": "error", "message": message, **extra}


@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log("%s %s -> %s %s: %s", request.method, request.url.path, exc.status_code, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, code=exc.code))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.warning("%s %s -> 400 validation failed: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=400,
        content=_error_body("Validation failed", code=ErrorCode.VALIDATION_FAILED, errors=errors),
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=_error_body(str(exc.detail)), headers=exc.headers)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("%s %s -> 500 unhandled error", request.method, request.url.path)
    body = _error_body("Internal server error", code=ErrorCode.INTERNAL_ERROR)
    if not settings.is_production:
        body["error"] = str(exc)
    return JSONResponse(status_code=500, content=body)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "success", "message": "LMS Backend is running!", "timestamp": now_utc().isoformat()}


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(courses.router)
app.include_router(cart.router)
app.include_router(access_keys.router)
app.include_router(course_content.router)
app.include_router(notices.router)
app.include_router(admin.router)
