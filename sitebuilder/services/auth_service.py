from sqlalchemy.orm import Session

from sitebuilder.database.models import User
from sitebuilder.schemas.auth_schema import UserCreate, UserUpdate
from sitebuilder.utils.dependencies import hash_password


def create_user(payload: UserCreate, db: Session) -> User:
    user = User(
        name=payload.name,
        email=payload.email.lower(),
        phone=payload.phone,
        role=payload.role.value,
        hashed_password=hash_password(payload.password),
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_user_by_email(email: str, db: Session):
    return db.query(User).filter_by(email=email.lower()).first()


def update_user(user: User, payload: UserUpdate, db: Session) -> User:
    if payload.name:
        user.name = payload.name
    if payload.phone is not None:
        user.phone = payload.phone
    db.commit()
    db.refresh(user)
    return user
