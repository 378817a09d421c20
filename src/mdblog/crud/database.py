"""Engine creation and store (re)initialisation"""

from pathlib import Path

from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine

from mdblog.crud.models import Post, SEORecord


def make_engine(db_url: str) -> Engine:
    return create_engine(db_url, echo=False)


def _sqlite_file(db_url: str) -> Path | None:
    """Return the database file for a file-backed SQLite URL, else None."""
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def reset_store(db_url: str) -> Engine:
    """Discard any previous post store and return an engine on a fresh, empty one."""
    path = _sqlite_file(db_url)
    if path is not None and path.exists():
        path.unlink()
    engine = make_engine(db_url)
    SQLModel.metadata.drop_all(engine, tables=[Post.__table__])
    SQLModel.metadata.create_all(engine, tables=[Post.__table__])
    return engine


def init_audit_store(db_url: str) -> Engine:
    """Open the SEO audit store, creating its table if missing."""
    engine = make_engine(db_url)
    SQLModel.metadata.create_all(engine, tables=[SEORecord.__table__])
    return engine
