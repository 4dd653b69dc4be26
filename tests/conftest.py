from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from postmeta.conf import settings

PostWriter = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolate_postmeta_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Keep tests hermetic: redirect postmeta paths to tmp_path + reset logging."""

    posts_dir = tmp_path / "_posts"
    posts_dir.mkdir(parents=True, exist_ok=True)

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "POSTS_DIR", posts_dir, raising=False)
    monkeypatch.setattr(settings, "POST_EXTENSIONS", [".md", ".markdown", ".html"], raising=False)
    monkeypatch.setattr(settings, "SITE_URL", "", raising=False)
    monkeypatch.setattr(settings, "SEARCH_CONTENT_CHARS", 2000, raising=False)
    monkeypatch.setattr(settings, "LOG_LEVEL", "WARNING", raising=False)

    yield posts_dir

    # The CLI attaches its own handler; let caplog see records again
    package_logger = logging.getLogger("postmeta")
    for h in list(package_logger.handlers):
        package_logger.removeHandler(h)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    return tmp_path / "_posts"


@pytest.fixture
def write_post(posts_dir: Path) -> PostWriter:
    """Write a post file into the posts directory and return its path."""

    def _write(name: str, content: str) -> Path:
        path = posts_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
