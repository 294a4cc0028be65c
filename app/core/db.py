from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.core.config import get_settings

settings = get_settings()

if not settings.database_url:
    # The app can still start, but any DB access will fail until DATABASE_URL is set.
    _engine = None
    SessionLocal = None
else:
    _engine = create_engine(settings.database_url, pool_pre_ping=True)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_db():
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set")
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def create_tables() -> None:
    """Create every table registered on the declarative Base."""
    if _engine is None:
        raise RuntimeError("DATABASE_URL is not set")
    from app.models.base import Base
    from app.models import account_model, announcement, application_model, category_model, panchayath_model, utility_model  # noqa: F401

    Base.metadata.create_all(bind=_engine)
