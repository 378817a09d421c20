"""schema.org BlogPosting structured data for rendered posts"""

import json

from markupsafe import Markup

from mdblog.config import Settings
from mdblog.core.transform import preview_image
from mdblog.crud.models import Post


def post_url(post: Post, settings: Settings) -> str:
    return f"{settings.base_url}/{post.slug}"


def build_json_ld(post: Post, settings: Settings) -> dict:
    """Return the BlogPosting dict for a post.

    description is omitted when empty; datePublished and dateModified are
    both the publish date since posts carry no separate update time.
    """
    url = post_url(post, settings)
    logo = preview_image('', settings)
    data = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        "headline": post.title,
        "description": post.description,
        "image": preview_image(post.image, settings),
        "datePublished": post.pub_date,
        "dateModified": post.pub_date,
        "url": url,
        "author": {"@type": "Person", "name": post.author or settings.default_author},
        "publisher": {
            "@type": "Organization",
            "name": settings.default_author,
            "logo": {"@type": "ImageObject", "url": logo},
        },
    }
    if not post.description:
        del data["description"]
    return data


def json_ld_script(data: dict) -> Markup:
    """Wrap structured data in a script tag safe to embed unescaped."""
    payload = json.dumps(data, indent=2, ensure_ascii=False).replace('</', '<\\/')
    return Markup(f'<script type="application/ld+json">\n{payload}\n</script>')
