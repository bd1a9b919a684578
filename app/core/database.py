from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Create Base class for models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine (and its connection pool) for a database URL.

    The engine is built once by the application lifespan and stored on
    app.state; nothing in this module holds a global engine.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,  # Connection pool size
        max_overflow=20  # Allow up to 20 connections beyond pool_size
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine, create_tables: bool = False) -> None:
    """
    Initialize database.

    Alembic owns the schema in deployment ("alembic upgrade head"), so tables
    are only created here when explicitly requested (local development).
    """
    from app.models import job, user  # noqa: F401  Import models to register them

    if create_tables:
        Base.metadata.create_all(bind=engine)
