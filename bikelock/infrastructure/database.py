from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from .config import settings

DATABASE_URL = settings.database_url

# One shared connection: an in-memory SQLite database exists only as long as
# its connection, and requests reach it from the thread pool.
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


def init_db() -> None:
    """Create the lock state and ride history tables if missing."""
    from bikelock.infrastructure.models import models  # noqa: F401  (registers the tables on Base)

    Base.metadata.create_all(bind=engine)
