from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
import logging

from app.core.settings import StoreConfig

logger = logging.getLogger("app.database")

Base = declarative_base()


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def create_store_engine(config: StoreConfig) -> Engine:
    """Create the process-wide engine for the device store.

    In-memory SQLite gets a StaticPool so every session sees the same database;
    server databases get a pre-pinged QueuePool.
    """
    if _is_sqlite(config.url):
        kwargs = {"connect_args": {"check_same_thread": False}, "echo": config.echo}
        if ":memory:" in config.url or config.url.endswith("://"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(config.url, **kwargs)
    else:
        engine = create_engine(
            config.url,
            poolclass=QueuePool,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_pre_ping=True,  # Validate connections before use
            pool_recycle=config.pool_recycle,
            echo=config.echo,
        )
    logger.info("Device store engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def ensure_schema(engine: Engine) -> None:
    """Create the device tables when they do not exist yet."""
    # Register the models on Base.metadata
    from app.models import device  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_database_health(engine: Engine) -> dict:
    """Check if the device store is accessible."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database health check: PASSED")
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Database health check: FAILED - {str(e)}")
        return {"status": "unhealthy", "database": f"error: {str(e)}"}
