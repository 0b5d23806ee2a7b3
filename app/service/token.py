import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.config.environments import Settings
from app.model.user import UserModel
from app.utility.errors import AuthenticationError, ServerError
from app.utility.security import sign_access_token, sign_refresh_token, decode_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


async def issue_tokens(db: AsyncSession, user_id: int, settings: Settings) -> TokenPair:
    """
    Mint a new access/refresh pair for a user and store the refresh token,
    replacing whichever one was stored before.

    Raises:
        ServerError: If the user cannot be loaded or the write fails
    """
    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise ServerError("Something went wrong while generating refresh and access tokens")

    access_token = sign_access_token(user, settings.access_token_secret, settings.access_token_expire_time)
    refresh_token = sign_refresh_token(user.id, settings.refresh_token_secret, settings.refresh_token_expire_time)

    user.refresh_token = refresh_token
    try:
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"Failed to store refresh token for user {user_id}: {str(e)}", exc_info=True)
        raise ServerError("Something went wrong while generating refresh and access tokens")

    return TokenPair(access_token=access_token, refresh_token=refresh_token)


async def rotate_refresh_token(db: AsyncSession, incoming_refresh_token: Optional[str], settings: Settings) -> TokenPair:
    """
    Exchange the stored refresh token for a new pair. Once rotated, the
    incoming token no longer matches the stored one and is rejected.
    """
    if not incoming_refresh_token:
        raise AuthenticationError("Unauthorized request")

    payload = decode_token(incoming_refresh_token, settings.refresh_token_secret)

    result = await db.execute(select(UserModel).where(UserModel.id == payload["_id"]))
    user = result.scalar_one_or_none()
    if not user:
        raise AuthenticationError("Invalid refresh token")

    if incoming_refresh_token != user.refresh_token:
        logger.info(f"Rejected stale refresh token for user {user.id}")
        raise AuthenticationError("Refresh token is expired or used")

    return await issue_tokens(db, user.id, settings)


async def revoke_refresh_token(db: AsyncSession, user: UserModel):
    user.refresh_token = None
    await db.commit()
