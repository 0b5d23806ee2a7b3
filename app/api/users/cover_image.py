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


@router.patch("/cover-image")
async def update_user_cover_image(
        coverImage: Optional[UploadFile] = File(None),
        user: UserModel = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings),
        storage: MediaStorage = Depends(get_storage)
):
    cover_image_local_path = await stage_upload(coverImage, settings.temp_dir)
    if not cover_image_local_path:
        raise ValidationError("Cover image file is missing")

    cover_image_url = await storage.upload_file(cover_image_local_path)
    if not cover_image_url:
        raise ValidationError("Error while uploading cover image")

    previous_cover_image = user.cover_image
    user.cover_image = cover_image_url
    await db.commit()
    await db.refresh(user)

    # previous cover is optional and may be empty
    if previous_cover_image and previous_cover_image != cover_image_url:
        await storage.delete_file(previous_cover_image)

    return api_response(status.HTTP_200_OK, "Cover image updated successfully", public_user(user))
