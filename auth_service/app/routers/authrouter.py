from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas import authschemas
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=None)
def register(
        req: authschemas.RegisterRequest,
        db: Session = Depends(get_db)):
    result = authservices.register_user(db, req)
    return success_response(
        data=result,
        message="User registered successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.post("/login", response_model=None)
def login(
        req: authschemas.LoginRequest,
        db: Session = Depends(get_db)):
    result = authservices.login_user(db, req)
    return success_response(
        data=result,
        message="Login successful",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL)


@router.get("/me", response_model=authschemas.AuthUser)
def me(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.get_me(db, current_user.actor_id)
