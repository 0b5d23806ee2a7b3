from fastapi import Depends, status
from app.api.dependency import get_current_user
from app.api.router_base import router_users as router
from app.model.user import UserModel, public_user
from app.utility.response import api_response


@router.get("/current")
async def get_current_user_profile(user: UserModel = Depends(get_current_user)):
    return api_response(status.HTTP_200_OK, "Current user fetched successfully", public_user(user))
