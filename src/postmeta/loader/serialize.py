"""Write a Post back out as front matter text."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml

from postmeta.loader.post import Post


def thaw(value: Any) -> Any:
    """Turn frozen extras back into plain dicts and lists for the YAML dumper."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


def post_metadata(post: Post) -> dict[str, Any]:
    """Return the post's front matter as a dict in canonical key order.

    Optional fields that are empty or unset are omitted.
    """
    metadata: dict[str, Any] = {"layout": post.layout, "title": post.title}
    if post.categories:
        metadata["categories"] = list(post.categories)
    if post.tags:
        metadata["tags"] = list(post.tags)
    if post.shortinfo is not None:
        metadata["shortinfo"] = post.shortinfo
    metadata["published"] = post.published
    for key, value in post.flags().items():
        if value is not None:
            metadata[key] = value
    metadata.update(thaw(post.extra))
    return metadata


def front_matter_text(metadata: dict[str, Any]) -> str:
    yaml_txt = yaml.safe_dump(
        metadata, allow_unicode=True, sort_keys=False, default_flow_style=False, width=1000
    )
    return f"---\n{yaml_txt}---\n"


def dump_post(post: Post) -> str:
    """Serialize a post to file content that `load_post()` reads back unchanged."""
    return front_matter_text(post_metadata(post)) + post.body
