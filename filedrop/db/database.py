import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)

engine: Engine | None = None


def init_db(database_url: str) -> Engine:
    """
    Crée l'engine, branche la session factory et crée les tables.
    """
    global engine

    connect_args = {}
    if database_url.startswith("sqlite"):
        # TestClient / threadpool : la connexion peut changer de thread
        connect_args["check_same_thread"] = False

    if engine is not None:
        engine.dispose()

    engine = create_engine(database_url, connect_args=connect_args)
    SessionLocal.configure(bind=engine)

    from filedrop.db import models  # noqa: F401  (enregistre les tables)

    Base.metadata.create_all(bind=engine)
    logger.info("Database ready (%s)", engine.url.render_as_string(hide_password=True))
    return engine


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
