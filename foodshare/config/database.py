"""Store configuration and connection setup"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from foodshare.config.settings import get_settings

settings = get_settings()


def build_engine(database_url: str):
    """Create an engine; in-memory SQLite shares one connection across sessions"""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    return create_engine(database_url, pool_pre_ping=True, echo=False)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Store session dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """Create all tables for the entity store"""
    from foodshare.models import Base

    Base.metadata.create_all(bind=bind or engine)
