from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool
from sqlalchemy.exc import OperationalError, DisconnectionError
from .config import settings
import logging

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.sql_echo,
        )
    # Add connection pooling settings to prevent connection issues
    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=10,  # Number of connections to maintain
        max_overflow=20,  # Additional connections that can be created
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_timeout=30,  # Timeout for getting connection from pool
        echo=settings.sql_echo,
        connect_args={
            "connect_timeout": 10,
            "application_name": "fittrack",
        },
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    """Create all tables that do not exist yet."""
    # Models must be imported so they register on Base.metadata
    from fittrack.models import user, workout, meal, weight_log  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except (OperationalError, DisconnectionError) as e:
        logger.error(f"Database connection error: {e}")
        db.close()
        # Try to get a new session
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        except (OperationalError, DisconnectionError) as e2:
            logger.error(f"Failed to reconnect to database: {e2}")
            db.close()
            raise
    try:
        yield db
    finally:
        db.close()
