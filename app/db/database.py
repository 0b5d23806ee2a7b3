from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

Base = declarative_base()


def to_async_url(database_url: str) -> str:
    # psycopg2 / plain postgres urls -> asyncpg
    if database_url.startswith("postgresql+psycopg2"):
        return database_url.replace("postgresql+psycopg2", "postgresql+asyncpg", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


def build_engine(database_url: str):
    async_url = to_async_url(database_url)

    connect_args = {}
    if async_url.startswith("postgresql+asyncpg"):
        # pgbouncer in transaction mode does not support prepared statements
        connect_args = {
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        }

    return create_async_engine(
        async_url,
        poolclass=NullPool,
        connect_args=connect_args,
    )


def build_session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
