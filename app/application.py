from typing import Optional
from fastapi import FastAPI
from app.config.environments import Settings
from app.config.log import configure_logging
from app.db.database import build_engine, build_session_factory
from app.lifespan import lifespan
from app.middleware.body_limit import add_body_limit
from app.middleware.cors import add_cors
from app.middleware.errors import add_error_handlers
from app.middleware.static import add_static_file_serving
from app.api.router import add_router
from app.utility.storage import MediaStorage


def create_application(settings: Settings, storage: Optional[MediaStorage] = None) -> FastAPI:
    configure_logging(settings.log_level)

    application = FastAPI(
        title="VideoTube FastAPI Service",
        description="Video hosting backend API documentation",
        version="1.0.0",
        lifespan=lifespan
    )

    engine = build_engine(settings.database_url)
    application.state.settings = settings
    application.state.engine = engine
    application.state.session_factory = build_session_factory(engine)
    application.state.storage = storage or MediaStorage(
        settings.supabase_project_url,
        settings.supabase_service_key,
        settings.storage_bucket
    )

    add_body_limit(application, settings.body_limit)
    add_cors(application, settings.allowed_origins)
    add_error_handlers(application, show_stack=not settings.is_production)
    add_router(application)
    add_static_file_serving(application, settings.static_dir)

    return application
