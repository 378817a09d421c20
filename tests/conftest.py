"""Root test configuration: shared settings and session-level cleanup of runtime artifacts"""

import shutil
from pathlib import Path

import pytest

from mdblog.config import Settings


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["posts.db", "seo.db"]
_CLEANUP_DIRS = ["build"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files and build output created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    """Settings rooted in tmp_path with sqlite files for both stores."""
    return Settings(
        site_url="https://blog.example.org",
        site_title="Example Blog",
        site_description="Writing about things",
        default_author="Jo Writer",
        default_image="/favicon.ico",
        posts_dir=str(tmp_path / "posts"),
        pages_dir=str(tmp_path / "pages"),
        public_dir=str(tmp_path / "public"),
        templates_dir=str(tmp_path / "templates"),
        build_dir=str(tmp_path / "build"),
        db_url=f"sqlite:///{tmp_path}/posts.db",
        seo_db_url=f"sqlite:///{tmp_path}/seo.db",
    )
