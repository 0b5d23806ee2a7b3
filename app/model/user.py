from sqlalchemy import Column, Integer, String, DateTime
from app.db.database import Base
from app.utility.time import utc_now


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    full_name = Column(String, nullable=False, index=True)
    avatar = Column(String, nullable=False)  # media host url
    cover_image = Column(String, nullable=True, default="")  # media host url
    password = Column(String, nullable=False)
    refresh_token = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)


def public_user(user: UserModel) -> dict:
    """Render a user without the password hash and the refresh token."""
    return {
        "_id": user.id,
        "username": user.username,
        "email": user.email,
        "fullName": user.full_name,
        "avatar": user.avatar,
        "coverImage": user.cover_image or "",
        "createdAt": user.created_at.isoformat() if user.created_at else None,
        "updatedAt": user.updated_at.isoformat() if user.updated_at else None,
    }
