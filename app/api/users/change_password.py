from typing import Optional
from fastapi import Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.dependency import get_current_user
from app.api.router_base import router_users as router
from app.db.dependency import get_db
from app.model.user import UserModel
from app.utility.errors import ValidationError
from app.utility.response import api_response
from app.utility.security import hash_password, verify_password


class ChangePasswordRequest(BaseModel):
    oldPassword: Optional[str] = None
    newPassword: Optional[str] = None


@router.post("/change-password")
async def change_current_password(
        data: ChangePasswordRequest,
        user: UserModel = Depends(get_current_user),
        db: AsyncSession = Depends(get_db)
):
    if not data.newPassword or not data.newPassword.strip():
        raise ValidationError("New password is required")

    if not verify_password(data.oldPassword, user.password):
        raise ValidationError("Invalid old password")

    user.password = hash_password(data.newPassword)
    await db.commit()

    return api_response(status.HTTP_200_OK, "Password changed successfully", {})
