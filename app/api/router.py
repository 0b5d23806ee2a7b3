from app.api.health import healthcheck
from app.api.router_base import router_users
from app.api.users import (register, login, logout, refresh_token, change_password,  # noqa: F401
                           current, update_account, avatar, cover_image)


def add_router(application):
    application.include_router(healthcheck.router)
    application.include_router(router_users)
