from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from collections.abc import Generator
from booktrack.core.config import settings

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, future=True)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)

# Get a database session for the current request.
def get_db() -> Generator[Session, None, None]:
    """
    One session per request, closed when the response is done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
