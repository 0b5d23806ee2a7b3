from fastapi import Request, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.config.environments import Settings
from app.db.dependency import get_db
from app.model.user import UserModel
from app.utility.cookies import ACCESS_TOKEN_COOKIE
from app.utility.errors import AuthenticationError
from app.utility.security import decode_token
from app.utility.storage import MediaStorage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> MediaStorage:
    return request.app.state.storage


def _read_access_token(request: Request):
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return None


async def get_current_user(
        request: Request,
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings)
) -> UserModel:
    token = _read_access_token(request)
    if not token:
        raise AuthenticationError("Unauthorized request")

    payload = decode_token(token, settings.access_token_secret)

    result = await db.execute(select(UserModel).where(UserModel.id == payload["_id"]))
    user = result.scalar_one_or_none()

    if not user:
        raise AuthenticationError("Invalid access token")

    return user
