"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from mdblog.crud.models import Post


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as s:
        yield s


def make_post(n: int, pub_date: str, tags=None) -> Post:
    return Post(
        title=f"Post {n}",
        content=f"<p>Body {n}</p>",
        pub_date=pub_date,
        headings=[f"Heading {n}"],
        slug=f"{pub_date.replace('-', '/')}/post-{n}",
        tags=tags if tags is not None else ["general"],
    )


@pytest.fixture(name="post_factory")
def post_factory_fixture():
    return make_post
