import logging
from fastapi import Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.dependency import get_current_user, get_settings
from app.api.router_base import router_users as router
from app.config.environments import Settings
from app.db.dependency import get_db
from app.model.user import UserModel
from app.service.token import revoke_refresh_token
from app.utility.cookies import clear_auth_cookies
from app.utility.response import api_response

logger = logging.getLogger(__name__)


@router.post("/logout")
async def logout(
        user: UserModel = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings)
):
    await revoke_refresh_token(db, user)
    logger.info(f"User {user.id} logged out")

    response = api_response(status.HTTP_200_OK, "User logged out", {})
    clear_auth_cookies(response, settings)
    return response
