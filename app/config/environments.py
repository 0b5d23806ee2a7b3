import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

DEFAULT_ACCESS_TOKEN_EXPIRE_TIME = 60 * 60 * 24  # 1 Day
DEFAULT_REFRESH_TOKEN_EXPIRE_TIME = 60 * 60 * 24 * 10  # 10 Day
DEFAULT_PORT = 8080
DEFAULT_ENVIRONMENT = "development"
DEFAULT_BODY_LIMIT = 16 * 1024
DEFAULT_STORAGE_BUCKET = "images"
DEFAULT_STATIC_DIR = "public"
DEFAULT_TEMP_DIR = os.path.join(DEFAULT_STATIC_DIR, "temp")


@dataclass(frozen=True)
class Settings:
    database_url: str
    access_token_secret: str
    refresh_token_secret: str
    supabase_project_url: str
    supabase_service_key: str
    access_token_expire_time: int = DEFAULT_ACCESS_TOKEN_EXPIRE_TIME
    refresh_token_expire_time: int = DEFAULT_REFRESH_TOKEN_EXPIRE_TIME
    port: int = DEFAULT_PORT
    environment: str = DEFAULT_ENVIRONMENT
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    storage_bucket: str = DEFAULT_STORAGE_BUCKET
    static_dir: str = DEFAULT_STATIC_DIR
    temp_dir: str = DEFAULT_TEMP_DIR
    body_limit: int = DEFAULT_BODY_LIMIT
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def load_settings() -> Settings:
    load_dotenv()

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL environment variable is missing! Set it in your .env file.")

    access_token_secret = os.getenv("ACCESS_TOKEN_SECRET")
    refresh_token_secret = os.getenv("REFRESH_TOKEN_SECRET")
    if not all([access_token_secret, refresh_token_secret]):
        raise RuntimeError("TOKEN related environment variable is missing! Set it in your .env file.")

    supabase_project_url = os.getenv("SUPABASE_PROJECT_URL")
    supabase_service_key = os.getenv("SUPABASE_SERVICE_KEY")
    if not all([supabase_project_url, supabase_service_key]):
        raise RuntimeError("SUPABASE related environment variable is missing! Set it in your .env file.")

    origins = os.getenv("ALLOWED_ORIGINS") or os.getenv("CORS_ORIGIN") or "*"

    return Settings(
        database_url=database_url,
        access_token_secret=access_token_secret,
        refresh_token_secret=refresh_token_secret,
        supabase_project_url=supabase_project_url,
        supabase_service_key=supabase_service_key,
        access_token_expire_time=int(os.getenv("ACCESS_TOKEN_EXPIRE_TIME", DEFAULT_ACCESS_TOKEN_EXPIRE_TIME)),
        refresh_token_expire_time=int(os.getenv("REFRESH_TOKEN_EXPIRE_TIME", DEFAULT_REFRESH_TOKEN_EXPIRE_TIME)),
        port=int(os.getenv("PORT", DEFAULT_PORT)),
        environment=os.getenv("ENVIRONMENT", DEFAULT_ENVIRONMENT),
        allowed_origins=[origin.strip() for origin in origins.split(",")],
        storage_bucket=os.getenv("STORAGE_BUCKET", DEFAULT_STORAGE_BUCKET),
        static_dir=os.getenv("STATIC_DIR", DEFAULT_STATIC_DIR),
        temp_dir=os.getenv("TEMP_DIR", DEFAULT_TEMP_DIR),
        body_limit=int(os.getenv("BODY_LIMIT", DEFAULT_BODY_LIMIT)),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
