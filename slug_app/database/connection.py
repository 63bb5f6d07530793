"""
SQLAlchemy engine and session factory.

Every store operation opens its own session from SessionLocal, so one engine
can be shared by all request threads.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from slug_app.config import settings


def build_engine(database_url: str):
    """Create an engine; SQLite connections are shared across threads"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": 30}
    return create_engine(database_url, connect_args=connect_args)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=engine):
    """Create all tables registered on Base"""
    # Import models so they're registered with Base
    from slug_app import models  # noqa: F401

    Base.metadata.create_all(bind=bind)
