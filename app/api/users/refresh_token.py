from typing import Optional
from fastapi import Request, Body, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.dependency import get_settings
from app.api.router_base import router_users as router
from app.config.environments import Settings
from app.db.dependency import get_db
from app.service.token import rotate_refresh_token
from app.utility.cookies import REFRESH_TOKEN_COOKIE, set_auth_cookies
from app.utility.response import api_response


class RefreshTokenRequest(BaseModel):
    refreshToken: Optional[str] = None


@router.post("/refresh-token")
async def refresh_access_token(
        request: Request,
        data: Optional[RefreshTokenRequest] = Body(None),
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings)
):
    incoming_refresh_token = request.cookies.get(REFRESH_TOKEN_COOKIE) or (data.refreshToken if data else None)

    tokens = await rotate_refresh_token(db, incoming_refresh_token, settings)

    response = api_response(
        status.HTTP_200_OK,
        "Access token refreshed",
        {
            "accessToken": tokens.access_token,
            "refreshToken": tokens.refresh_token,
        }
    )
    set_auth_cookies(response, tokens, settings)
    return response
