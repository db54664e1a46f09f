import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import atomic
from shared.core.exceptions import ConflictError, InvalidInputError
from shared.models.users import Users
from shared.utils.enums import UserRole
from ..schemas import authschemas

logger = logging.getLogger(__name__)


def _find_by_email(db: Session, email: str):
    return db.query(Users).filter(func.lower(Users.email) == email.lower()).first()


def register_user(db: Session, req: authschemas.RegisterRequest) -> authschemas.AuthenticationResponse:
    if _find_by_email(db, req.email):
        raise ConflictError(f"User with email '{req.email}' already exists")

    with atomic(db):
        user = Users(
            email=req.email.lower(),
            name=req.name,
            # elevated roles are granted through /api/users only
            role=UserRole.ASSET_RESPONSIBLE.value,
            is_active=True,
        )
        user.set_password(req.password)
        db.add(user)

    db.refresh(user)
    logger.info("User %s registered with role %s", user.id, user.role)
    return authschemas.AuthenticationResponse(
        user=authschemas.AuthUser.model_validate(user),
        token=auth.token_for_user(user),
    )


def login_user(db: Session, req: authschemas.LoginRequest) -> authschemas.AuthenticationResponse:
    user = _find_by_email(db, req.email)

    # same message for unknown email and wrong password
    if not user or not user.verify_password(req.password):
        logger.warning("Failed login for %s", req.email)
        raise InvalidInputError("Invalid email or password")

    if not user.is_active:
        logger.warning("Login refused for inactive user %s", user.id)
        raise InvalidInputError("User account is inactive")

    return authschemas.AuthenticationResponse(
        user=authschemas.AuthUser.model_validate(user),
        token=auth.token_for_user(user),
    )


def get_me(db: Session, user_id) -> authschemas.AuthUser:
    user = db.query(Users).filter(Users.id == user_id).first()
    return authschemas.AuthUser.model_validate(user)
