from fastapi import Response
from app.config.environments import Settings

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"


def _same_site(settings: Settings) -> str:
    return "none" if settings.is_production else "lax"


def set_auth_cookies(response: Response, tokens, settings: Settings):
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=tokens.access_token,
        httponly=True,
        max_age=settings.access_token_expire_time,
        secure=True,
        samesite=_same_site(settings)
    )
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=tokens.refresh_token,
        httponly=True,
        max_age=settings.refresh_token_expire_time,
        secure=True,
        samesite=_same_site(settings)
    )


def clear_auth_cookies(response: Response, settings: Settings):
    for key in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            key,
            httponly=True,
            secure=True,
            samesite=_same_site(settings)
        )
