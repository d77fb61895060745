"""Database bootstrap helpers."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from payaudit.common.config import settings


def make_engine(dsn: str):
    """Build an engine; SQLite shares one connection so in-memory databases survive."""

    if dsn.startswith("sqlite"):
        return create_engine(dsn, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return create_engine(dsn, pool_pre_ping=True)


# Single SQLAlchemy engine per process.
engine = make_engine(settings.database_dsn)
# `expire_on_commit=False` keeps payment infos and their audit rows readable after commit.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""

    pass
