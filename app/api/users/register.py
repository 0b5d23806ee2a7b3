import logging
from typing import Optional
from fastapi import UploadFile, File, Form, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, or_
from app.api.dependency import get_settings, get_storage
from app.api.router_base import router_users as router
from app.config.environments import Settings
from app.db.dependency import get_db
from app.model.user import UserModel, public_user
from app.utility.errors import ValidationError, ConflictError, ServerError
from app.utility.response import api_response
from app.utility.security import hash_password
from app.utility.storage import MediaStorage, stage_upload, remove_local_file

logger = logging.getLogger(__name__)


@router.post("/register")
async def register(
        username: Optional[str] = Form(None),
        email: Optional[str] = Form(None),
        fullName: Optional[str] = Form(None),
        password: Optional[str] = Form(None),
        avatar: Optional[UploadFile] = File(None),
        coverImage: Optional[UploadFile] = File(None),
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings),
        storage: MediaStorage = Depends(get_storage)
):
    fields = [username, email, fullName, password]
    if any(field is None or field.strip() == "" for field in fields):
        raise ValidationError("All fields are required")

    username = username.strip().lower()
    email = email.strip().lower()

    result = await db.execute(
        select(UserModel).where(or_(UserModel.username == username, UserModel.email == email)).limit(1)
    )
    if result.scalars().first():
        raise ConflictError("User already exists")

    avatar_local_path = await stage_upload(avatar, settings.temp_dir)
    if not avatar_local_path:
        raise ValidationError("Avatar is required")

    try:
        cover_image_local_path = await stage_upload(coverImage, settings.temp_dir)
    except Exception:
        remove_local_file(avatar_local_path)
        raise

    avatar_url = await storage.upload_file(avatar_local_path)
    if not avatar_url:
        if cover_image_local_path:
            remove_local_file(cover_image_local_path)
        raise ValidationError("Avatar file is required")

    cover_image_url = await storage.upload_file(cover_image_local_path)
    uploaded_urls = [url for url in (avatar_url, cover_image_url) if url]

    new_user = UserModel(
        username=username,
        email=email,
        full_name=fullName.strip(),
        avatar=avatar_url,
        cover_image=cover_image_url or "",
        password=hash_password(password),
    )
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        for url in uploaded_urls:
            await storage.delete_file(url)
        raise ConflictError("User already exists")

    result = await db.execute(select(UserModel).where(UserModel.id == new_user.id))
    created_user = result.scalar_one_or_none()
    if not created_user:
        raise ServerError("Something went wrong while registering the user")

    logger.info(f"Registered user {created_user.id}")

    return api_response(status.HTTP_201_CREATED, "User registered successfully", public_user(created_user))
