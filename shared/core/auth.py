from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from fastapi import status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.core.config import settings
from shared.core.permissions import can_manage_assets, can_manage_users, has_permission
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken
from shared.core.database import get_db

security = HTTPBearer()


def create_access_token(data: dict, expires_minutes: Optional[int] = None):
    payload = data.copy()
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    payload["exp"] = expires
    payload["iss"] = settings.JWT_ISSUER

    token = jwt.encode(payload, settings.JWT_SECRET,
                       algorithm=settings.JWT_ALGORITHM)
    return token


def token_for_user(user: Users) -> str:
    return create_access_token({
        "user_id": str(user.id),
        "email": user.email,
        "role": user.role,
        "name": user.name,
    })


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM],
                             issuer=settings.JWT_ISSUER)
    except JWTError:
        return error_response(
            message="Invalid or expired token",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not payload.get("user_id") or not payload.get("role"):
        return error_response(
            message="Invalid token structure",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return UserToken(**payload)


def validate_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
):
    user_data = verify_token(credentials.credentials)

    # role and active flag are read from the database, not trusted from the token
    user = db.query(Users).filter(Users.id == _to_uuid(user_data.user_id)).first()

    if not user:
        return error_response(
            message="User not found",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not user.is_active:
        return error_response(
            message="User is not active. Access denied",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INACTIVE),
            http_status=status.HTTP_403_FORBIDDEN
        )

    user_data.role = user.role
    user_data.is_active = user.is_active
    return user_data


def allow_admin(current_user: UserToken = Depends(validate_current_token)):
    if not can_manage_users(current_user.role):
        return error_response(
            message="Access forbidden: Admins only",
            status_code=str(AppStatusCode.AUTHORIZATION_FORBIDDEN),
            http_status=status.HTTP_403_FORBIDDEN
        )
    return current_user


def allow_inventory_access(current_user: UserToken = Depends(validate_current_token)):
    if not can_manage_assets(current_user.role):
        return error_response(
            message="Access forbidden: insufficient role",
            status_code=str(AppStatusCode.AUTHORIZATION_FORBIDDEN),
            http_status=status.HTTP_403_FORBIDDEN
        )
    return current_user


def require_permission(resource: str, action: str):
    def checker(current_user: UserToken = Depends(validate_current_token)):
        if not has_permission(current_user.role, resource, action):
            return error_response(
                message=f"Access forbidden: {resource}.{action} not allowed for role {current_user.role}",
                status_code=str(AppStatusCode.AUTHORIZATION_FORBIDDEN),
                http_status=status.HTTP_403_FORBIDDEN
            )
        return current_user
    return checker


def _to_uuid(value):
    try:
        return UUID(str(value))
    except ValueError:
        return error_response(
            message="Invalid token structure",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )
