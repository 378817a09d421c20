"""RSS 2.0 feed built from the posts ingested in this run"""

import xml.etree.ElementTree as ET
from datetime import date, datetime, time, timezone
from email.utils import format_datetime
from pathlib import Path

from mdblog.config import Settings
from mdblog.core.models import FeedItem
from mdblog.crud.models import Post


RSS_VERSION = "2.0"


def rfc2822(value: date | datetime) -> str:
    """Format a date (midnight UTC) or aware datetime as an RSS pubDate."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time(), tzinfo=timezone.utc)
    return format_datetime(value)


def feed_item(post: Post, settings: Settings) -> FeedItem:
    """Feed entry for a post; pub_date must already be a valid YYYY-MM-DD string."""
    return FeedItem(
        title=post.title,
        link=f"{settings.base_url}/{post.slug}/",
        description=post.content,
        pub_date=date.fromisoformat(post.pub_date),
    )


def build_feed(items: list[FeedItem], settings: Settings, now: datetime | None = None) -> bytes:
    """Serialise channel metadata plus one <item> per entry."""
    now = now or datetime.now(timezone.utc)
    rss = ET.Element("rss", version=RSS_VERSION)
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = settings.site_title
    ET.SubElement(channel, "link").text = settings.base_url
    ET.SubElement(channel, "description").text = settings.site_description
    ET.SubElement(channel, "pubDate").text = rfc2822(now)

    for item in items:
        node = ET.SubElement(channel, "item")
        ET.SubElement(node, "title").text = item.title
        ET.SubElement(node, "link").text = item.link
        ET.SubElement(node, "description").text = item.description
        ET.SubElement(node, "pubDate").text = rfc2822(item.pub_date)

    ET.indent(rss, space="  ")
    return ET.tostring(rss, encoding="utf-8", xml_declaration=True)


def write_feed(items: list[FeedItem], settings: Settings, now: datetime | None = None) -> Path:
    """Write build/feed.xml. OSError propagates: a missing feed fails the build."""
    out = Path(settings.build_dir) / "feed.xml"
    out.write_bytes(build_feed(items, settings, now))
    return out
