"""Post persistence: insertion and the listing queries used by the renderers"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from mdblog.crud.models import Post


logger = logging.getLogger(__name__)


def insert_post(session: Session, post: Post, source: str = "") -> Post | None:
    """Commit one post. On a database error, roll back, log and return None."""
    try:
        session.add(post)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"error inserting post data into database for file {source or post.slug}: {e}")
        return None
    session.refresh(post)
    return post


def list_posts(session: Session, limit: int | None = None) -> list[Post]:
    """Return posts newest first (ties broken by insertion order), optionally bounded."""
    stmt = select(Post).order_by(Post.pub_date.desc(), Post.id.asc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.exec(stmt).all())


def latest_posts(session: Session, limit: int = 10) -> list[Post]:
    """Return the `limit` most recently published posts."""
    return list_posts(session, limit=limit)


def list_tag_sets(session: Session) -> list[list[str]]:
    """Return each post's tag list, in insertion order."""
    return [list(tags or []) for tags in session.exec(select(Post.tags).order_by(Post.id)).all()]
