import logging
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from filedrop.core.config import Settings
from filedrop.core.deps import get_settings_dep
from filedrop.db.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def home():
    return "Backend is running."


@router.get("/health")
def health(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    """
    Prêt = base joignable + dossier d'uploads présent. Sinon "degraded".
    """
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.warning("Health check: database unreachable (%s)", e)
        database = "error"

    storage = "ok" if Path(settings.STORAGE_PATH).is_dir() else "missing"

    return {
        "status": "ok" if database == storage == "ok" else "degraded",
        "version": settings.APP_VERSION,
        "database": database,
        "storage": storage,
    }


@router.get("/version")
def version(settings: Settings = Depends(get_settings_dep)):
    return {"name": settings.APP_NAME, "version": settings.APP_VERSION, "env": settings.APP_ENV}
