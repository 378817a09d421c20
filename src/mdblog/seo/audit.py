"""SEO audit: crawl the rendered tree, extract page metadata, validate outbound links"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator, Optional

import requests
from bs4 import BeautifulSoup
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from mdblog.config import Settings
from mdblog.crud.database import init_audit_store
from mdblog.crud.seo import save_record


logger = logging.getLogger(__name__)

EXTERNAL_SCHEMES = ("http://", "https://")


class AuditError(RuntimeError):
    """The audit cannot start (missing build dir or unusable audit store)."""


def iter_html_files(build_dir: Path) -> Iterator[Path]:
    """Yield every .html file under build_dir in a stable order."""
    yield from sorted(p for p in build_dir.rglob("*.html") if p.is_file())


def extract_title(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    return tag.get_text() if tag else ""


def extract_meta_description(soup: BeautifulSoup) -> str:
    tag = soup.find("meta", attrs={"name": "description"})
    return tag.get("content", "") if tag else ""


def extract_links(soup: BeautifulSoup) -> list[str]:
    return [a["href"] for a in soup.find_all("a", href=True)]


def parse_page(path: Path) -> tuple[str, str, list[str]]:
    """Return (title, meta description, hrefs) of one HTML file."""
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    return extract_title(soup), extract_meta_description(soup), extract_links(soup)


def is_external(link: str) -> bool:
    return link.lower().startswith(EXTERNAL_SCHEMES)


def check_link(link: str, timeout: Optional[float] = None) -> bool:
    """HEAD the link, following redirects; network errors and a final 404 count as invalid."""
    try:
        resp = requests.head(link, timeout=timeout, allow_redirects=True)
    except requests.RequestException as e:
        logger.warning(f"error checking link {link}: {e}")
        return False
    if resp.status_code == requests.codes.not_found:
        logger.warning(f"link {link} returned 404")
        return False
    return True


def validate_links(links: list[str], settings: Settings) -> list[str]:
    """Return the external links that pass check_link, in page order.

    Internal links are not checked and are not part of the result.
    """
    external = [link for link in links if is_external(link)]
    timeout = settings.link_check_timeout
    if settings.link_check_workers > 1 and len(external) > 1:
        with ThreadPoolExecutor(max_workers=settings.link_check_workers) as pool:
            results = list(pool.map(lambda link: check_link(link, timeout), external))
    else:
        results = [check_link(link, timeout) for link in external]
    return [link for link, ok in zip(external, results) if ok]


def audit_file(session: Session, path: Path, settings: Settings) -> bool:
    """Audit one file and persist its record. Returns False when the file was skipped."""
    try:
        title, description, links = parse_page(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"error opening file {path}: {e}")
        return False
    except Exception as e:
        logger.error(f"error parsing HTML file {path}: {e}")
        return False
    return save_record(session, str(path), title, description, validate_links(links, settings)) is not None


def audit_site(settings: Settings) -> int:
    """Crawl build_dir and write one SEO record per HTML file. Returns records written."""
    build_dir = Path(settings.build_dir)
    if not build_dir.is_dir():
        raise AuditError(f"build directory {build_dir} does not exist")
    try:
        engine = init_audit_store(settings.seo_db_url)
    except SQLAlchemyError as e:
        raise AuditError(f"error initializing SEO database: {e}") from e

    written = 0
    try:
        with Session(engine) as session:
            for path in iter_html_files(build_dir):
                if audit_file(session, path, settings):
                    written += 1
    finally:
        engine.dispose()
    logger.info(f"SEO audit stored {written} record(s)")
    return written
