"""Loaders for post front matter, single files and directories."""

from postmeta.loader.exceptions import (
    LoadError,
    MalformedValue,
    MissingDelimiter,
    MissingRequiredField,
)
from postmeta.loader.frontmatter import parse_yaml_frontmatter, split_frontmatter
from postmeta.loader.post import FLAG_DEFAULTS, REQUIRED_FIELDS, Post, load_post
from postmeta.loader.post_loader import (
    LoadResult,
    PostFile,
    PostLoader,
    load_post_file,
    load_posts,
    parse_post_filename,
)
from postmeta.loader.serialize import dump_post, post_metadata

__all__ = [
    # Errors
    "LoadError",
    "MissingDelimiter",
    "MissingRequiredField",
    "MalformedValue",
    # Frontmatter parsing
    "parse_yaml_frontmatter",
    "split_frontmatter",
    # Single post
    "Post",
    "load_post",
    "REQUIRED_FIELDS",
    "FLAG_DEFAULTS",
    # Directory loading
    "PostFile",
    "LoadResult",
    "PostLoader",
    "load_post_file",
    "load_posts",
    "parse_post_filename",
    # Serialization
    "dump_post",
    "post_metadata",
]
