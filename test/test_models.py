import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from app.db.database import Base, build_engine, build_session_factory, to_async_url
from app.model.subscription import SubscriptionModel
from app.model.user import UserModel, public_user
from app.model.video import VideoModel


@pytest_asyncio.fixture
async def db(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'models.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with build_session_factory(engine)() as session:
        yield session

    await engine.dispose()


async def add_user(db, username):
    user = UserModel(
        username=username,
        email=f"{username}@example.com",
        full_name=username.title(),
        avatar=f"https://media.example.com/{username}.png",
        password="hash",
        refresh_token="token",
    )
    db.add(user)
    await db.commit()
    return user


@pytest.mark.asyncio
async def test_video_defaults(db):
    owner = await add_user(db, "owner")
    video = VideoModel(
        owner_id=owner.id,
        video_file="https://media.example.com/v.mp4",
        thumbnail="https://media.example.com/v.jpg",
        title="Title",
        description="Description",
        duration=12.5,
    )
    db.add(video)
    await db.commit()

    result = await db.execute(select(VideoModel).where(VideoModel.owner_id == owner.id))
    stored = result.scalar_one()
    assert stored.views == 0
    assert stored.is_published is True
    assert stored.created_at is not None


@pytest.mark.asyncio
async def test_subscription_edge_is_unique(db):
    subscriber = await add_user(db, "subscriber")
    channel = await add_user(db, "channel")

    db.add(SubscriptionModel(subscriber_id=subscriber.id, channel_id=channel.id))
    await db.commit()

    # the reverse direction is a different edge
    db.add(SubscriptionModel(subscriber_id=channel.id, channel_id=subscriber.id))
    await db.commit()

    db.add(SubscriptionModel(subscriber_id=subscriber.id, channel_id=channel.id))
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()


@pytest.mark.asyncio
async def test_public_user_hides_secrets(db):
    user = await add_user(db, "viewer")

    rendered = public_user(user)

    assert rendered["username"] == "viewer"
    assert rendered["coverImage"] == ""
    assert "password" not in rendered
    assert "refreshToken" not in rendered


def test_to_async_url():
    assert to_async_url("postgresql+psycopg2://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert to_async_url("postgresql://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert to_async_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"
