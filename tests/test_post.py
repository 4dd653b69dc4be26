"""Tests for load_post and the Post record."""

from __future__ import annotations

import dataclasses

import pytest

from postmeta.loader.exceptions import (
    LoadError,
    MalformedValue,
    MissingDelimiter,
    MissingRequiredField,
)
from postmeta.loader.post import Post, load_post


def _post(front_matter: str, body: str = "") -> str:
    return f"---\n{front_matter}---\n{body}"


def test_load_post_example():
    content = """---
layout: post
title: Example
tags: [a, b]
published: false
---
body text
"""

    post = load_post(content)

    assert post.layout == "post"
    assert post.title == "Example"
    assert post.tags == ("a", "b")
    assert post.categories == ()
    assert post.published is False
    assert post.fullview is False
    assert post.comments is False
    assert post.related is False
    assert post.body == "body text\n"


def test_load_post_just_text_is_missing_delimiter():
    with pytest.raises(MissingDelimiter):
        load_post("just text")


def test_load_post_without_title_is_missing_required_field():
    with pytest.raises(MissingRequiredField) as exc_info:
        load_post(_post("layout: post\n"))

    assert exc_info.value.field == "title"


def test_load_post_without_layout_is_missing_required_field():
    with pytest.raises(MissingRequiredField) as exc_info:
        load_post(_post("title: No layout\n"))

    assert exc_info.value.field == "layout"


@pytest.mark.parametrize("title", ['""', "'   '", ""])
def test_load_post_empty_or_null_title_is_missing(title: str):
    with pytest.raises(MissingRequiredField):
        load_post(_post(f"layout: post\ntitle: {title}\n"))


def test_load_post_errors_share_base_class():
    with pytest.raises(LoadError):
        load_post(_post("layout: post\n"))


@pytest.mark.parametrize(
    ("layout", "title"),
    [
        ("post", "Health checks in Docker Compose"),
        ("page", "jq: a JSON query language"),
        ("post", "Émojis & ünïcode ✓"),
    ],
)
def test_load_post_keeps_exact_title_and_layout(layout: str, title: str):
    post = load_post(_post(f'layout: {layout}\ntitle: "{title}"\n'))

    assert post.layout == layout
    assert post.title == title


def test_load_post_numeric_title_is_text():
    post = load_post(_post("layout: post\ntitle: 2024\n"))

    assert post.title == "2024"


def test_load_post_published_defaults_to_true():
    post = load_post(_post("layout: post\ntitle: Hi\n"))

    assert post.published is True
    assert post.shortinfo is None
    assert post.hide_related is None
    assert post.mermaid is None
    assert post.link_list is None
    assert post.extra == {}


def test_load_post_null_optional_field_uses_default():
    post = load_post(_post("layout: post\ntitle: Hi\ncomments:\npublished:\n"))

    assert post.comments is False
    assert post.published is True


def test_load_post_published_must_be_boolean():
    with pytest.raises(MalformedValue) as exc_info:
        load_post(_post("layout: post\ntitle: Hi\npublished: no\n"))

    assert exc_info.value.field == "published"


def test_load_post_block_style_categories_keep_order():
    content = _post("layout: post\ntitle: Hi\ncategories:\n  - tools\n  - docker\n  - tools\n")

    post = load_post(content)

    assert post.categories == ("tools", "docker", "tools")


def test_load_post_tags_are_deduplicated_in_written_order():
    post = load_post(_post("layout: post\ntitle: Hi\ntags: [jq, json, jq, cli]\n"))

    assert post.tags == ("jq", "json", "cli")


@pytest.mark.parametrize(
    "tags",
    [
        "[[a, b], c]",
        "[{name: a}]",
        "{a: 1}",
        "docker",
        "[a, true]",
        "[a, null]",
    ],
)
def test_load_post_rejects_malformed_tags(tags: str):
    with pytest.raises(MalformedValue) as exc_info:
        load_post(_post(f"layout: post\ntitle: Hi\ntags: {tags}\n"))

    assert exc_info.value.field == "tags"


def test_load_post_rejects_nested_title():
    with pytest.raises(MalformedValue) as exc_info:
        load_post(_post("layout: post\ntitle:\n  text: Hi\n"))

    assert exc_info.value.field == "title"


def test_load_post_rejects_boolean_layout():
    with pytest.raises(MalformedValue) as exc_info:
        load_post(_post("layout: true\ntitle: Hi\n"))

    assert exc_info.value.field == "layout"


def test_load_post_flags_pass_through_unchanged():
    content = _post(
        "layout: post\ntitle: Hi\nfullview: true\nrelated: false\nhide-related: true\n"
        "mermaid: dark\nlink-list: yes\ncomments: disqus\n"
    )

    post = load_post(content)

    assert post.fullview is True
    assert post.related is False
    assert post.hide_related is True
    assert post.mermaid == "dark"
    assert post.link_list == "yes"
    assert post.comments == "disqus"
    assert post.flags() == {
        "fullview": True,
        "comments": "disqus",
        "related": False,
        "hide-related": True,
        "mermaid": "dark",
        "link-list": "yes",
    }


def test_load_post_rejects_nested_flag():
    with pytest.raises(MalformedValue) as exc_info:
        load_post(_post("layout: post\ntitle: Hi\nmermaid: [a, b]\n"))

    assert exc_info.value.field == "mermaid"


def test_load_post_shortinfo_keeps_raw_html():
    content = _post(
        'layout: post\ntitle: Hi\nshortinfo: "Notes on <code>jq</code> &amp; friends"\n'
    )

    post = load_post(content)

    assert post.shortinfo == "Notes on <code>jq</code> &amp; friends"


def test_load_post_unknown_keys_go_to_extra():
    content = _post(
        "layout: post\ntitle: Hi\ndate: 2024-01-05 10:00:00 +0200\n"
        "permalink: /jq/\nimage:\n  path: /a.png\n"
    )

    post = load_post(content)

    assert post.extra == {
        "date": "2024-01-05 10:00:00 +0200",
        "permalink": "/jq/",
        "image": {"path": "/a.png"},
    }


def test_load_post_body_is_untouched():
    body = "\n# Heading\n\n```json\n{\"a\": 1}\n```\n\n---\n\ntrailing   \n"

    post = load_post(_post("layout: post\ntitle: Hi\n", body))

    assert post.body == body


def test_post_is_immutable():
    post = load_post(_post("layout: post\ntitle: Hi\n"))

    with pytest.raises(dataclasses.FrozenInstanceError):
        post.title = "Changed"  # type: ignore[misc]


def test_post_equality_is_by_value():
    content = _post("layout: post\ntitle: Hi\ntags: [a]\n", "body")

    assert load_post(content) == load_post(content)
    assert load_post(content) == Post(layout="post", title="Hi", body="body", tags=("a",))


@pytest.mark.parametrize("title", ["3.10", "12:30", "010", "1e3", "0x1F", ".inf"])
def test_load_post_number_like_title_is_kept_as_written(title: str):
    post = load_post(_post(f"layout: post\ntitle: {title}\n"))

    assert post.title == title


def test_load_post_number_like_tags_are_not_merged():
    post = load_post(_post("layout: post\ntitle: Versions\ntags: [1.10, 1.1, 3.0]\n"))

    assert post.tags == ("1.10", "1.1", "3.0")


def test_load_post_number_like_extra_is_kept_as_written():
    post = load_post(_post("layout: post\ntitle: Hi\nversion: 1.20\norder: 007\n"))

    assert post.extra == {"version": "1.20", "order": "007"}


def test_load_post_rejects_explicitly_tagged_number():
    with pytest.raises(MalformedValue) as exc_info:
        load_post(_post("layout: post\ntitle: !!int 3\n"))

    assert exc_info.value.field == "title"


def test_post_extra_is_read_only():
    post = load_post(
        _post("layout: post\ntitle: Hi\nimage:\n  path: /a.png\ngallery: [a.png, b.png]\n")
    )

    with pytest.raises(TypeError):
        post.extra["image"] = "changed"  # type: ignore[index]
    with pytest.raises(TypeError):
        post.extra["image"]["path"] = "/b.png"  # type: ignore[index]
    assert post.extra["gallery"] == ("a.png", "b.png")


def test_post_extra_is_copied_from_caller_dict():
    extra = {"permalink": "/jq/"}
    post = Post(layout="post", title="Hi", extra=extra)

    extra["permalink"] = "/changed/"

    assert post.extra == {"permalink": "/jq/"}


def test_post_is_hashable():
    content = _post("layout: post\ntitle: Hi\ntags: [a]\nimage:\n  path: /a.png\n")

    first, second = load_post(content), load_post(content)

    assert hash(first) == hash(second)
    assert len({first, second}) == 1
    assert {first: "ok"}[second] == "ok"
