import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from befundtool.config import settings
from befundtool.models import Base

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.sqlite_url,
    connect_args={"check_same_thread": False},
    echo=False,
    pool_size=5,
    pool_recycle=300,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


@event.listens_for(engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.close()


def init_db():
    settings.sqlite_db_path.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(engine)

    # Seed templates + correction dictionary on first run
    from befundtool.store import get_correction_store, get_template_store
    added = get_template_store().seed_if_empty()
    if added:
        logger.info("Seeded %d default template(s)", added)
    added = get_correction_store().seed_if_empty()
    if added:
        logger.info("Seeded %d default correction(s)", added)

    logger.info("Database initialized at %s", settings.sqlite_db_path)


@contextmanager
def get_db():
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
