from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from datetime import datetime, timedelta, timezone
from typing import Optional

from sitebuilder.database.init import get_db
from sitebuilder.database.models.user_model import User
from sitebuilder.config import (
    ALGORITHM,
    SECRET_KEY,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    AUTH_COOKIE_NAME,
)
from sitebuilder.enums.user_role import UserRole
from sitebuilder.exceptions.custom import AuthenticationError, PermissionDenied

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/signin", auto_error=False)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password):
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError("Token expired", code="TOKEN_EXPIRED")
    except JWTError:
        raise AuthenticationError("Invalid token", code="INVALID_TOKEN")


def extract_token(request: Request, bearer: Optional[str]) -> Optional[str]:
    """Bearer header first, then the auth cookie."""
    if bearer:
        return bearer
    return request.cookies.get(AUTH_COOKIE_NAME)


def _load_user(db: Session, payload: dict) -> Optional[User]:
    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationError("Invalid token", code="INVALID_TOKEN")
    try:
        return db.query(User).filter(User.id == int(user_id)).first()
    except ValueError:
        raise AuthenticationError("Invalid token", code="INVALID_TOKEN")


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    token = extract_token(request, token)
    if not token:
        raise AuthenticationError("Authentication required", code="NO_TOKEN")

    payload = decode_access_token(token)
    user = _load_user(db, payload)
    if user is None:
        raise AuthenticationError("User not found", code="USER_NOT_FOUND")
    if not user.is_active:
        raise PermissionDenied("Account is not active", code="ACCOUNT_INACTIVE")

    return user


def get_optional_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user, but anonymous or invalid credentials yield None."""
    token = extract_token(request, token)
    if not token:
        return None
    try:
        user = _load_user(db, decode_access_token(token))
    except AuthenticationError:
        return None
    if user is None or not user.is_active:
        return None
    return user


def require_roles(*roles: UserRole):
    """Dependency factory: the caller's role must be one of `roles`."""
    allowed = {role.value for role in roles}

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise PermissionDenied("Insufficient permissions", code="INSUFFICIENT_ROLE")
        return current_user

    return checker


admin_required = require_roles(UserRole.ADMIN, UserRole.SUPER_ADMIN)
vendor_required = require_roles(UserRole.VENDOR, UserRole.ADMIN, UserRole.SUPER_ADMIN)
