from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from filedrop.core.config import get_settings
from filedrop.core.errors import register_exception_handlers
from filedrop.core.logging import setup_logging
from filedrop.db.database import init_db
from filedrop.routers import system, auth, files


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    init_db(settings.DATABASE_URL)
    Path(settings.STORAGE_PATH).mkdir(parents=True, exist_ok=True)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Stockage de fichiers par utilisateur (upload, liste, aperçu, téléchargement)",
    )

    # Middleware CORS
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    allow_all = not origins or "*" in origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else origins,
        # "*" + credentials est refusé par les navigateurs ; le token passe en header
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers
    app.include_router(system.router)
    app.include_router(auth.router)
    app.include_router(files.router)

    return app
