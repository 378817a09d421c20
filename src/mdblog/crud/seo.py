"""SEO audit persistence"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from mdblog.crud.models import SEORecord


logger = logging.getLogger(__name__)


def save_record(session: Session, path: str, title: str, meta_description: str, links: list[str]) -> SEORecord | None:
    """Replace the audit row for path. Database errors are logged and yield None."""
    record = SEORecord(path=path, title=title, meta_description=meta_description, links=", ".join(links))
    try:
        for old in session.exec(select(SEORecord).where(SEORecord.path == path)).all():
            session.delete(old)
        session.add(record)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"error inserting SEO data for file {path}: {e}")
        return None
    session.refresh(record)
    return record


def list_records(session: Session) -> list[SEORecord]:
    return list(session.exec(select(SEORecord).order_by(SEORecord.path)).all())
