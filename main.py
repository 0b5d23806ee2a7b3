import uvicorn
from app.application import create_application
from app.config.environments import load_settings

settings = load_settings()
application = create_application(settings)

if __name__ == "__main__":
    uvicorn.run(
        application,
        host="0.0.0.0",
        port=settings.port,
        reload=False
    )
