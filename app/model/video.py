from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, text
from app.db.database import Base
from app.utility.time import utc_now


class VideoModel(Base):
    """Uploaded video; file and thumbnail live on the media host"""
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    video_file = Column(String, nullable=False)
    thumbnail = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    duration = Column(Float, nullable=False)  # seconds
    views = Column(Integer, nullable=False, default=0, server_default=text("0"))
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
