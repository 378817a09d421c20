"""Unit tests for crud/database.py and crud/seo.py"""

from sqlalchemy import inspect
from sqlmodel import Session

from mdblog.crud.database import init_audit_store, reset_store
from mdblog.crud.models import Post
from mdblog.crud.posts import insert_post, list_posts
from mdblog.crud.seo import list_records, save_record


def test_reset_store_starts_empty_every_time(tmp_path):
    url = f"sqlite:///{tmp_path}/posts.db"
    engine = reset_store(url)
    with Session(engine) as session:
        insert_post(session, Post(title="Old", pub_date="2020-01-01", slug="2020/01/01/old"))
    engine.dispose()

    engine = reset_store(url)
    with Session(engine) as session:
        assert list_posts(session) == []
    engine.dispose()


def test_reset_store_creates_only_posts(tmp_path):
    engine = reset_store(f"sqlite:///{tmp_path}/posts.db")
    assert inspect(engine).get_table_names() == ["posts"]
    engine.dispose()


def test_audit_store_is_separate(tmp_path):
    engine = init_audit_store(f"sqlite:///{tmp_path}/seo.db")
    assert inspect(engine).get_table_names() == ["seo"]
    engine.dispose()


def test_save_record_replaces_by_path(tmp_path):
    engine = init_audit_store(f"sqlite:///{tmp_path}/seo.db")
    with Session(engine) as session:
        save_record(session, "build/a.html", "A", "desc", ["https://x.org", "https://y.org"])
        save_record(session, "build/a.html", "A2", "desc2", [])
        save_record(session, "build/b.html", "B", "", ["https://z.org"])

        records = list_records(session)
        assert [r.path for r in records] == ["build/a.html", "build/b.html"]
        a, b = records
        assert a.title == "A2"
        assert a.link_list() == []
        assert b.links == "https://z.org"
    engine.dispose()


def test_link_list_splits_joined_links(tmp_path):
    engine = init_audit_store(f"sqlite:///{tmp_path}/seo.db")
    with Session(engine) as session:
        rec = save_record(session, "p.html", "", "", ["https://a.org", "https://b.org/x"])
        assert rec.links == "https://a.org, https://b.org/x"
        assert rec.link_list() == ["https://a.org", "https://b.org/x"]
    engine.dispose()
