"""Batch loader for a directory of post files.

Each file is loaded on its own: a broken post is recorded as a failed
`LoadResult` and never stops the remaining files from loading. The loader
keeps no state between passes; callers hold the returned collections.
"""

from __future__ import annotations

import dataclasses
import datetime
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from postmeta.loader.exceptions import LoadError
from postmeta.loader.post import Post, load_post

logger = logging.getLogger(__name__)

# Jekyll post naming: YYYY-MM-DD-slug.ext
POST_FILENAME_PATTERN = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)$")

DEFAULT_EXTENSIONS = (".md", ".markdown", ".html")


@dataclasses.dataclass(frozen=True, slots=True)
class PostFile:
    """A loaded post together with what its file name says about it."""

    path: Path
    post: Post
    date: datetime.date | None
    slug: str


@dataclasses.dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of loading one file: either an entry or an error."""

    path: Path
    entry: PostFile | None = None
    error: LoadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_post_filename(path: Path) -> tuple[datetime.date | None, str]:
    """Extract (date, slug) from a post file name.

    Names that do not follow `YYYY-MM-DD-slug` give no date and the stem as slug.
    """
    match = POST_FILENAME_PATTERN.match(path.stem)
    if not match:
        return None, path.stem

    try:
        date = datetime.date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError:
        logger.debug(f"Ignoring invalid date in post file name {path.name}")
        return None, path.stem
    return date, match["slug"]


def load_post_file(path: Path) -> PostFile:
    """Read and load a single post file.

    Raises:
        LoadError: If the front matter is invalid (with `path` set)
        OSError: If the file cannot be read
    """
    # utf-8-sig drops a leading BOM so the opening delimiter sits at offset 0
    content = path.read_text(encoding="utf-8-sig")
    try:
        post = load_post(content)
    except LoadError as e:
        e.path = path
        raise
    date, slug = parse_post_filename(path)
    return PostFile(path=path, post=post, date=date, slug=slug)


def load_posts(paths: Iterable[Path]) -> list[LoadResult]:
    """Load every path independently, collecting per-file results."""
    results: list[LoadResult] = []
    for path in paths:
        try:
            entry = load_post_file(path)
        except LoadError as e:
            logger.warning(f"Invalid post {path}: {e.message}")
            results.append(LoadResult(path=path, error=e))
            continue
        except OSError as e:
            logger.warning(f"Failed to read post file {path}: {e}")
            results.append(LoadResult(path=path, error=LoadError(str(e), path=path)))
            continue

        logger.debug(f"Loaded post '{entry.post.title}' from {path}")
        results.append(LoadResult(path=path, entry=entry))
    return results


class PostLoader:
    """Discover post files in a directory and load them."""

    posts_dir: Path
    extensions: tuple[str, ...]

    def __init__(self, posts_dir: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        """Initialize post loader.

        Args:
            posts_dir: Directory containing post files (searched recursively)
            extensions: File extensions treated as posts
        """
        self.posts_dir = posts_dir
        self.extensions = tuple(ext.lower() for ext in extensions)

    def discover(self) -> list[Path]:
        """Return post file paths, sorted.

        Hidden files and names starting with an underscore are skipped.
        """
        if not self.posts_dir.exists():
            logger.debug(f"Posts directory {self.posts_dir} does not exist, no posts loaded")
            return []

        if not self.posts_dir.is_dir():
            logger.warning(f"Posts directory {self.posts_dir} is not a directory")
            return []

        paths = []
        for path in sorted(self.posts_dir.rglob("*")):
            relative = path.relative_to(self.posts_dir)
            if any(part.startswith((".", "_")) for part in relative.parts):
                continue
            if path.is_file() and path.suffix.lower() in self.extensions:
                paths.append(path)
        return paths

    def load_all(self) -> list[LoadResult]:
        """Load every discovered post file."""
        return load_posts(self.discover())

    def posts(self, results: list[LoadResult] | None = None) -> list[PostFile]:
        """Return successfully loaded posts, failures skipped.

        Without `results` each call is a fresh pass over the directory; pass the
        output of `load_all()` to take several views of one snapshot.
        """
        if results is None:
            results = self.load_all()
        return [r.entry for r in results if r.entry is not None]

    def errors(self, results: list[LoadResult] | None = None) -> list[LoadError]:
        """Return the errors of files that failed to load."""
        if results is None:
            results = self.load_all()
        return [r.error for r in results if r.error is not None]

    def published(self, results: list[LoadResult] | None = None) -> list[PostFile]:
        """Return loaded posts whose `published` flag is true."""
        return [entry for entry in self.posts(results) if entry.post.published]
