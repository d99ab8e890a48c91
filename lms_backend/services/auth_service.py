import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import ConflictError, UnauthorizedError
from lms_backend.core.security import create_access_token, hash_password, verify_password
from lms_backend.models import User
from lms_backend.schemas.auth import AuthData, LoginRequest, RegisterRequest, UserSummary

logger = logging.getLogger(__name__)


def issue_token(user: User) -> AuthData:
    token = create_access_token(user.id, email=user.email, role=user.role, name=user.name)
    return AuthData(
        user=UserSummary(id=user.id, email=user.email, name=user.name, role=user.role),
        token=token,
    )


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalars().first()


def register_user(db: Session, payload: RegisterRequest) -> AuthData:
    email = payload.email.lower().strip()

    if find_user_by_email(db, email):
        raise ConflictError("User with this email already exists", code=ErrorCode.EMAIL_ALREADY_REGISTERED)

    # Admins are only created by seeding or by another admin
    role = "student" if payload.role == "admin" else payload.role
    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        name=payload.name.strip(),
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        role=role,
        cart=[],
        enrolled_courses=[],
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("User with this email already exists", code=ErrorCode.EMAIL_ALREADY_REGISTERED) from exc
    db.refresh(user)

    logger.info("New user registered: %s (%s)", user.id, role)
    return issue_token(user)


def login_user(db: Session, payload: LoginRequest) -> AuthData:
    email = payload.email.lower().strip()
    user = find_user_by_email(db, email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise UnauthorizedError("Invalid email or password", code=ErrorCode.INVALID_CREDENTIALS)

    logger.info("User logged in: %s", user.id)
    return issue_token(user)
