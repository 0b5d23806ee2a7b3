from fastapi.middleware.cors import CORSMiddleware


def add_cors(application, allowed_origins):
    application.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
