# app/db/session.py
"""
Engine and sessions for the stable/campaign store.

SQLite URLs share one connection (in-memory databases would otherwise
vanish between sessions); everything else gets a pooled engine.
"""
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from app.core.config import DATABASE_URL

log = logging.getLogger("campaigns.database")


def _build_engine(url: str):
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )
    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=5,
        pool_pre_ping=True
    )


engine = _build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Request-scoped session, closed once the response is sent"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def test_db_connection() -> bool:
    """Run SELECT 1 against the configured database"""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        log.debug("✅ Database reachable")
        return True
    except Exception as e:
        log.error(f"❌ Database connection failed: {e}")
        return False


def init_db():
    """Create the stables, campaigns, goals and channels tables if missing"""
    from app.db.base import Base
    try:
        Base.metadata.create_all(bind=engine)
        log.info(f"✅ Tables ready: {', '.join(sorted(Base.metadata.tables))}")
    except Exception as e:
        log.error(f"❌ Failed to create tables: {e}")
        raise
