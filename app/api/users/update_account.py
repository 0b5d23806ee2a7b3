from typing import Optional
from fastapi import Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from app.api.dependency import get_current_user
from app.api.router_base import router_users as router
from app.db.dependency import get_db
from app.model.user import UserModel, public_user
from app.utility.errors import ValidationError, ConflictError
from app.utility.response import api_response


class UpdateAccountRequest(BaseModel):
    fullName: Optional[str] = None
    email: Optional[str] = None


@router.patch("/update-account")
async def update_account_details(
        data: UpdateAccountRequest,
        user: UserModel = Depends(get_current_user),
        db: AsyncSession = Depends(get_db)
):
    full_name = (data.fullName or "").strip()
    email = (data.email or "").strip().lower()
    if not full_name or not email:
        raise ValidationError("All fields are required")

    result = await db.execute(
        select(UserModel).where(UserModel.email == email, UserModel.id != user.id)
    )
    if result.scalar_one_or_none():
        raise ConflictError("Email is already in use")

    user.full_name = full_name
    user.email = email
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Email is already in use")
    await db.refresh(user)

    return api_response(status.HTTP_200_OK, "Account details updated successfully", public_user(user))
