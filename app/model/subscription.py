from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from app.db.database import Base
from app.utility.time import utc_now


class SubscriptionModel(Base):
    """Directed edge: subscriber follows channel (both users)"""
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    subscriber_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    channel_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
