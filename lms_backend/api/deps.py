import logging
from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import ForbiddenError, UnauthorizedError
from lms_backend.core.security import STAFF_ROLES, Principal, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

__all__ = ["STAFF_ROLES", "Principal", "get_current_principal", "require_roles"]


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    if credentials is None:
        raise UnauthorizedError("No token provided")

    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Token expired", code=ErrorCode.TOKEN_EXPIRED) from exc
    except jwt.PyJWTError as exc:
        logger.info("Token verification failed: %s", exc)
        raise UnauthorizedError("Invalid token", code=ErrorCode.INVALID_TOKEN) from exc

    user_id = payload.get("uid") or payload.get("sub")
    if payload.get("type") != "access" or not user_id:
        raise UnauthorizedError("Invalid token", code=ErrorCode.INVALID_TOKEN)

    return Principal(
        id=str(user_id),
        email=payload.get("email", ""),
        role=payload.get("role", "student"),
        name=payload.get("name", ""),
    )


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def require_roles(*roles: str) -> Callable[[Principal], Principal]:
    def guard(principal: CurrentPrincipal) -> Principal:
        if principal.role not in roles:
            label = "Admin" if roles == ("admin",) else "Instructor"
            raise ForbiddenError(f"Access denied. {label} privileges required.")
        return principal

    return guard


AdminPrincipal = Annotated[Principal, Depends(require_roles("admin"))]
StaffPrincipal = Annotated[Principal, Depends(require_roles(*STAFF_ROLES))]
