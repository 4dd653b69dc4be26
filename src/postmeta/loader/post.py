"""Post record and the single-file front matter loader.

A post file is a `---` delimited YAML block followed by a Markdown/HTML body:

    ---
    layout: post
    title: Example
    tags: [a, b]
    published: false
    ---
    body text

`load_post()` turns such text into an immutable `Post`. The body is kept
exactly as written; rendering it is left to the site generator.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from postmeta.loader.exceptions import MalformedValue, MissingRequiredField
from postmeta.loader.frontmatter import parse_yaml_frontmatter

FlagValue = bool | str

REQUIRED_FIELDS = ("layout", "title")

# Renderer flags, keyed by their name in the file
FLAG_DEFAULTS: dict[str, FlagValue | None] = {
    "fullview": False,
    "comments": False,
    "related": False,
    "hide-related": None,
    "mermaid": None,
    "link-list": None,
}

KNOWN_FIELDS = frozenset(
    {*REQUIRED_FIELDS, "categories", "tags", "shortinfo", "published", *FLAG_DEFAULTS}
)


@dataclasses.dataclass(frozen=True, slots=True)
class Post:
    """Validated front matter of one post plus its untouched body."""

    layout: str
    title: str
    body: str = ""
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    shortinfo: str | None = None
    published: bool = True
    fullview: FlagValue = False
    comments: FlagValue = False
    related: FlagValue = False
    hide_related: FlagValue | None = None
    mermaid: FlagValue | None = None
    link_list: FlagValue | None = None
    # Read-only view; nested mappings and lists are frozen too. Not part of the hash.
    extra: Mapping[str, Any] = dataclasses.field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", freeze(self.extra))

    def flags(self) -> dict[str, FlagValue | None]:
        """Return renderer flags keyed by their front matter names."""
        return {
            "fullview": self.fullview,
            "comments": self.comments,
            "related": self.related,
            "hide-related": self.hide_related,
            "mermaid": self.mermaid,
            "link-list": self.link_list,
        }


def freeze(value: Any) -> Any:
    """Return a read-only copy: mappings become MappingProxyType, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, list | tuple):
        return tuple(freeze(v) for v in value)
    return value


def _describe(value: Any) -> str:
    if isinstance(value, dict):
        return "a mapping"
    if isinstance(value, list):
        return "a list"
    if isinstance(value, bool):
        return "a boolean"
    return type(value).__name__


def _scalar_text(key: str, value: Any) -> str:
    """Return a string value; explicitly tagged numbers and booleans are rejected."""
    if not isinstance(value, str):
        raise MalformedValue(f"'{key}' must be a string, got {_describe(value)}", field=key)
    return value


def _string_list(key: str, value: Any, *, dedupe: bool = False) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise MalformedValue(f"'{key}' must be a list of strings, got {_describe(value)}", field=key)

    items: list[str] = []
    for item in value:
        if isinstance(item, dict | list):
            raise MalformedValue(f"'{key}' items must be strings, got {_describe(item)}", field=key)
        if item is None:
            raise MalformedValue(f"'{key}' contains an empty item", field=key)
        text = _scalar_text(key, item)
        if dedupe and text in items:
            continue
        items.append(text)
    return tuple(items)


def _flag(key: str, value: Any) -> FlagValue:
    if isinstance(value, bool):
        return value
    return _scalar_text(key, value)


def _published(value: Any) -> bool:
    if not isinstance(value, bool):
        raise MalformedValue(
            f"'published' must be true or false, got {_describe(value)}", field="published"
        )
    return value


def load_post(raw_content: str) -> Post:
    """Load one post from its raw file content.

    Args:
        raw_content: Full text of the post file

    Returns:
        Post with defaults applied to absent optional fields

    Raises:
        MissingDelimiter: If the content has no `---` delimited block at the top
        MissingRequiredField: If `title` or `layout` is absent or empty
        MalformedValue: If a value has the wrong shape
    """
    parsed = parse_yaml_frontmatter(raw_content)
    # A null value means the key is absent
    metadata: dict[str, Any] = {k: v for k, v in parsed["metadata"].items() if v is not None}

    for key in REQUIRED_FIELDS:
        value = metadata.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingRequiredField(f"Missing or empty '{key}' field", field=key)

    flags = {
        key: _flag(key, metadata[key]) if key in metadata else default
        for key, default in FLAG_DEFAULTS.items()
    }

    return Post(
        layout=_scalar_text("layout", metadata["layout"]),
        title=_scalar_text("title", metadata["title"]),
        body=parsed["body"],
        categories=_string_list("categories", metadata["categories"])
        if "categories" in metadata
        else (),
        tags=_string_list("tags", metadata["tags"], dedupe=True) if "tags" in metadata else (),
        shortinfo=_scalar_text("shortinfo", metadata["shortinfo"])
        if "shortinfo" in metadata
        else None,
        published=_published(metadata["published"]) if "published" in metadata else True,
        fullview=flags["fullview"],  # type: ignore[arg-type]
        comments=flags["comments"],  # type: ignore[arg-type]
        related=flags["related"],  # type: ignore[arg-type]
        hide_related=flags["hide-related"],
        mermaid=flags["mermaid"],
        link_list=flags["link-list"],
        extra={k: v for k, v in metadata.items() if k not in KNOWN_FIELDS},
    )
