"""Split post files into a YAML front matter block and a body.

Shared by the single-post loader and the batch post loader.
"""

from __future__ import annotations

import re
from typing import Any

import yaml
from yaml.constructor import ConstructorError

from postmeta.loader.exceptions import MalformedValue, MissingDelimiter

# Opening `---` at offset 0, closing `---` on a line of its own
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<block>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
OPENING_PATTERN = re.compile(r"\A---[ \t]*\r?\n")

_BOOL_TAG = "tag:yaml.org,2002:bool"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_UNRESOLVED_TAGS = (_BOOL_TAG, _TIMESTAMP_TAG, _INT_TAG, _FLOAT_TAG)


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader restricted to the scalars front matter actually uses.

    Only `true`/`false` resolve to booleans. Numbers and timestamps stay plain
    strings, so `title: 3.10` and `date: 2024-01-05 10:00:00 +0200` are passed
    through as written.
    Duplicate keys are rejected.
    """

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[str] = set()
        for key_node, _value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                if key_node.value in seen:
                    raise ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key '{key_node.value}'",
                        key_node.start_mark,
                    )
                seen.add(key_node.value)
        return super().construct_mapping(node, deep=deep)


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _UNRESOLVED_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FrontMatterLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def split_frontmatter(content: str) -> tuple[str, str]:
    """Split raw post content into the front matter block and the body.

    Args:
        content: Full file content

    Returns:
        Tuple of (YAML block text, body text exactly as written)

    Raises:
        MissingDelimiter: If the opening or closing `---` line is missing
    """
    match = FRONTMATTER_PATTERN.match(content)
    if match:
        return match.group("block"), content[match.end() :]

    if OPENING_PATTERN.match(content):
        raise MissingDelimiter("Front matter is not closed by a '---' line")
    raise MissingDelimiter("Content does not start with a '---' front matter line")


def parse_yaml_frontmatter(content: str) -> dict[str, Any]:
    """Parse YAML frontmatter from post content.

    Args:
        content: Full file content with frontmatter

    Returns:
        Dict with 'metadata' (parsed YAML mapping) and 'body' (remaining content)

    Raises:
        MissingDelimiter: If there is no delimited block
        MalformedValue: If the block is not valid YAML or not a mapping
    """
    yaml_block, body = split_frontmatter(content)
    try:
        metadata = yaml.load(yaml_block, Loader=FrontMatterLoader)
    except yaml.YAMLError as e:
        raise MalformedValue(f"Invalid YAML in front matter: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise MalformedValue(
            f"Front matter must be a mapping of keys to values, got {type(metadata).__name__}"
        )

    non_string_keys = [key for key in metadata if not isinstance(key, str)]
    if non_string_keys:
        raise MalformedValue(f"Front matter keys must be strings, got {non_string_keys[0]!r}")

    return {"metadata": metadata, "body": body}
