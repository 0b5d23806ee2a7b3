from typing import Optional
from fastapi import UploadFile, File, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.dependency import get_current_user, get_settings, get_storage
from app.api.router_base import router_users as router
from app.config.environments import Settings
from app.db.dependency import get_db
from app.model.user import UserModel, public_user
from app.utility.errors import ValidationError
from app.utility.response import api_response
from app.utility.storage import MediaStorage, stage_upload


@router.patch("/avatar")
async def update_user_avatar(
        avatar: Optional[UploadFile] = File(None),
        user: UserModel = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings),
        storage: MediaStorage = Depends(get_storage)
):
    avatar_local_path = await stage_upload(avatar, settings.temp_dir)
    if not avatar_local_path:
        raise ValidationError("Avatar file is missing")

    avatar_url = await storage.upload_file(avatar_local_path)
    if not avatar_url:
        raise ValidationError("Error while uploading avatar")

    previous_avatar = user.avatar
    user.avatar = avatar_url
    await db.commit()
    await db.refresh(user)

    if previous_avatar and previous_avatar != avatar_url:
        await storage.delete_file(previous_avatar)

    return api_response(status.HTTP_200_OK, "Avatar updated successfully", public_user(user))
