import logging
from typing import Optional
from fastapi import Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from app.api.dependency import get_settings
from app.api.router_base import router_users as router
from app.config.environments import Settings
from app.db.dependency import get_db
from app.model.user import UserModel, public_user
from app.service.token import issue_tokens
from app.utility.cookies import set_auth_cookies
from app.utility.errors import ValidationError, NotFoundError, AuthenticationError
from app.utility.response import api_response
from app.utility.security import verify_password

logger = logging.getLogger(__name__)


class LoginRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


@router.post("/login")
async def login(
        data: LoginRequest,
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings)
):
    username = (data.username or "").strip().lower()
    email = (data.email or "").strip().lower()

    if not username and not email:
        raise ValidationError("Username or email is required")
    if not data.password:
        raise ValidationError("Password is required")

    conditions = []
    if username:
        conditions.append(UserModel.username == username)
    if email:
        conditions.append(UserModel.email == email)

    result = await db.execute(select(UserModel).where(or_(*conditions)).limit(1))
    user = result.scalars().first()

    if not user:
        raise NotFoundError("User does not exist")

    if not verify_password(data.password, user.password):
        raise AuthenticationError("Invalid user credentials")

    tokens = await issue_tokens(db, user.id, settings)
    logger.info(f"User {user.id} logged in")

    response = api_response(
        status.HTTP_200_OK,
        "User logged in successfully",
        {
            "user": public_user(user),
            "accessToken": tokens.access_token,
            "refreshToken": tokens.refresh_token,
        }
    )
    set_auth_cookies(response, tokens, settings)
    return response
