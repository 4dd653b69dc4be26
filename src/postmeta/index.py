"""Search index and topic counts built from loaded posts.

The search index mirrors the `search.json` records consumed by the site's
client-side search: id, title, url, date, categories, tags, shortinfo and a
plain-text excerpt of the body.
"""

from __future__ import annotations

import datetime
import re
from collections import Counter
from collections.abc import Iterable
from typing import Any, Literal
from urllib.parse import quote

from postmeta.loader.post_loader import PostFile

HTML_TAG_PATTERN = re.compile(r"<[^>]+>")
LIQUID_PATTERN = re.compile(r"\{%.*?%\}|\{\{.*?\}\}", re.DOTALL)
WHITESPACE_PATTERN = re.compile(r"\s+")

TopicField = Literal["tags", "categories"]


def plain_text(body: str, limit: int | None = None) -> str:
    """Strip HTML and Liquid tags from a body and collapse whitespace."""
    text = LIQUID_PATTERN.sub(" ", body)
    text = HTML_TAG_PATTERN.sub(" ", text)
    text = WHITESPACE_PATTERN.sub(" ", text).strip()
    if limit is not None and len(text) > limit:
        text = text[:limit].rstrip()
    return text


def post_date(entry: PostFile) -> datetime.date | None:
    """Date of a post: from its file name, else from a `date` key written as YYYY-MM-DD..."""
    if entry.date is not None:
        return entry.date
    raw = entry.post.extra.get("date")
    if raw is None:
        return None
    try:
        return datetime.date.fromisoformat(str(raw)[:10])
    except ValueError:
        return None


def post_url(entry: PostFile, site_url: str = "") -> str:
    """URL of a post following Jekyll's default `date` permalink style.

    An explicit `permalink` key wins.
    """
    base = site_url.rstrip("/")
    permalink = entry.post.extra.get("permalink")
    if isinstance(permalink, str) and permalink:
        return base + "/" + permalink.lstrip("/")

    segments = [quote(c.lower()) for c in dict.fromkeys(entry.post.categories)]
    date = post_date(entry)
    if date is not None:
        segments += [f"{date:%Y}", f"{date:%m}", f"{date:%d}"]
    segments.append(f"{quote(entry.slug)}.html")
    return base + "/" + "/".join(segments)


def search_document(
    entry: PostFile, site_url: str = "", content_chars: int | None = None
) -> dict[str, Any]:
    post = entry.post
    raw_date = post.extra.get("date")
    if raw_date is not None:
        date = str(raw_date)
    elif entry.date is not None:
        date = entry.date.isoformat()
    else:
        date = ""

    return {
        "id": entry.slug,
        "title": post.title,
        "url": post_url(entry, site_url),
        "date": date,
        "categories": list(post.categories),
        "tags": list(post.tags),
        "shortinfo": post.shortinfo or "",
        "content": plain_text(post.body, content_chars),
    }


def build_search_index(
    entries: Iterable[PostFile], site_url: str = "", content_chars: int | None = None
) -> list[dict[str, Any]]:
    """Build search records for published posts, newest first (undated last)."""
    published = [entry for entry in entries if entry.post.published]
    dated = sorted(
        (e for e in published if post_date(e) is not None),
        key=lambda e: post_date(e) or datetime.date.min,
        reverse=True,
    )
    undated = [e for e in published if post_date(e) is None]
    return [search_document(e, site_url, content_chars) for e in [*dated, *undated]]


def count_terms(entries: Iterable[PostFile], field: TopicField = "tags") -> list[tuple[str, int]]:
    """Count tag or category usage over published posts, most used first."""
    counter: Counter[str] = Counter()
    for entry in entries:
        if not entry.post.published:
            continue
        counter.update(set(getattr(entry.post, field)))
    return sorted(counter.items(), key=lambda item: (-item[1], item[0].lower()))
