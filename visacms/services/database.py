"""Table definitions and engine/session setup for the record store."""

import datetime
import logging

from sqlalchemy import Column, DateTime, Integer, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from visacms.config import DATABASE_URL

logger = logging.getLogger(__name__)

Base = declarative_base()


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


class NewsRow(Base):
    __tablename__ = "news"

    id         = Column(Integer, primary_key=True)
    title      = Column(Text, nullable=False)
    slug       = Column(String(255), unique=True, nullable=False)
    summary    = Column(Text, default="")
    image      = Column(Text, default="")
    tag        = Column(Text, default="")
    time       = Column(Text, default="")
    read_time  = Column(Text, default="")
    content    = Column(Text, default="")
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class VisaRow(Base):
    __tablename__ = "visas"

    id               = Column(Integer, primary_key=True)
    slug             = Column(String(255), unique=True, nullable=False)
    name             = Column(Text, nullable=False)
    description      = Column(Text, default="")
    info             = Column(Text, default="")
    meta_title       = Column(Text, default="")
    meta_description = Column(Text, default="")
    meta_keywords    = Column(Text, default="")
    image            = Column(Text, default="")


def make_engine(url: str) -> Engine:
    """Create an engine for *url*.

    SQLite connections are shared across FastAPI's worker threads, and an
    in-memory database is pinned to a single connection so every session
    sees the same tables.
    """
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=False, **kwargs)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


def init_schema(bind: Engine = engine) -> None:
    """Create the ``news`` and ``visas`` tables if they do not exist yet."""
    Base.metadata.create_all(bind)
    logger.info("Schema initialised", extra={"tables": sorted(Base.metadata.tables)})


def get_session_factory() -> sessionmaker:
    """FastAPI dependency returning the session factory used by the stores."""
    return SessionLocal
