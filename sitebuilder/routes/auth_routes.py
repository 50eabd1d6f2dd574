import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sitebuilder.config import ACCESS_TOKEN_EXPIRE_MINUTES, AUTH_COOKIE_NAME, DEBUG
from sitebuilder.database.init import get_db
from sitebuilder.database.models.user_model import User
from sitebuilder.exceptions.custom import AuthenticationError, ConflictError, PermissionDenied
from sitebuilder.responses.success import created_response, data_response, success_response
from sitebuilder.schemas.auth_schema import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from sitebuilder.services.auth_service import create_user, get_user_by_email, update_user
from sitebuilder.utils.dependencies import (
    create_access_token,
    get_current_user,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def token_response(user: User, message: str, status_code: int = 200):
    token = create_access_token(user)
    payload = TokenResponse(access_token=token, user=UserResponse.model_validate(user))
    if status_code == 201:
        response = created_response(payload, message)
    else:
        response = data_response(payload, message)
    response.set_cookie(
        AUTH_COOKIE_NAME,
        token,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=not DEBUG,
    )
    return response


@router.post("/signup")
def signup(payload: UserCreate, db: Session = Depends(get_db)):
    if get_user_by_email(payload.email, db):
        raise ConflictError("User already exists", code="EMAIL_TAKEN")

    user = create_user(payload, db)
    logger.info("User %s signed up as %s", user.id, user.role)
    return token_response(user, "Account created successfully", status_code=201)


@router.post("/signin")
def signin(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = get_user_by_email(credentials.email, db)
    if not user or not verify_password(credentials.password, user.hashed_password):
        raise AuthenticationError("Invalid credentials", code="INVALID_CREDENTIALS")
    if not user.is_active:
        raise PermissionDenied("Account is not active", code="ACCOUNT_INACTIVE")

    return token_response(user, "Signed in successfully")


@router.post("/signout")
def signout():
    response = success_response("Signed out successfully")
    response.delete_cookie(AUTH_COOKIE_NAME)
    return response


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    return data_response(UserResponse.model_validate(current_user))


@router.patch("/me")
def update_me(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = update_user(current_user, payload, db)
    return data_response(UserResponse.model_validate(user), "Profile updated successfully")
