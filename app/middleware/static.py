from fastapi.staticfiles import StaticFiles
import os


def add_static_file_serving(application, static_dir):
    """
    Mount static file serving for the public directory under /static.
    Skips mounting if the directory can't be created (read-only environments).
    """
    static_dir = os.path.abspath(static_dir)

    try:
        os.makedirs(static_dir, exist_ok=True)
    except (OSError, PermissionError):
        return

    application.mount("/static", StaticFiles(directory=static_dir), name="static")
