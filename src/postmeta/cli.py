"""Command-line interface for postmeta"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, cast

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from postmeta.conf import settings
from postmeta.index import TopicField, build_search_index, count_terms
from postmeta.loader import LoadError, PostLoader, load_post_file, post_metadata
from postmeta.log import configure_logging

app = typer.Typer(add_completion=False)

# soft_wrap keeps long paths on one line when output is piped
console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


class OutputFormat(str, Enum):
    yaml = "yaml"
    json = "json"


class TopicFieldOption(str, Enum):
    tags = "tags"
    categories = "categories"


PostsDirArgument = Annotated[
    Path | None,
    typer.Argument(help="Posts directory (defaults to POSTMETA_POSTS_DIR or ./_posts)."),
]


def _loader(posts_dir: Path | None) -> PostLoader:
    return PostLoader(posts_dir or settings.POSTS_DIR, settings.POST_EXTENSIONS)


@app.callback()
def run(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every loaded file."),
    ] = False,
) -> None:
    """Validate and export blog post front matter."""
    configure_logging(logging.DEBUG if verbose else None)


@app.command()
def check(posts_dir: PostsDirArgument = None) -> None:
    """Load every post and report files with invalid front matter."""
    results = _loader(posts_dir).load_all()
    failures = 0
    for result in results:
        error = result.error
        if error is None:
            continue
        failures += 1
        console.print(
            f"[red]✗[/] {escape(str(result.path))}: "
            f"[bold]{type(error).__name__}[/] {escape(error.message)}"
        )

    if failures:
        console.print(f"[bold red]{failures} of {len(results)} posts failed to load.[/]")
        raise typer.Exit(code=1)
    console.print(f"[bold green]✓ {len(results)} posts loaded.[/]")


@app.command("list")
def list_posts(
    posts_dir: PostsDirArgument = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Include unpublished posts."),
    ] = False,
) -> None:
    """List loaded posts."""
    loader = _loader(posts_dir)
    entries = loader.posts() if show_all else loader.published()

    if not entries:
        print("No posts found.")
        return

    print(f"{'Date':<12} {'Published':<10} {'Slug':<40} {'Title'}")
    print("-" * 90)
    for entry in entries:
        date = entry.date.isoformat() if entry.date else "-"
        published = "yes" if entry.post.published else "no"
        print(f"{date:<12} {published:<10} {entry.slug:<40} {entry.post.title}")


@app.command()
def show(
    path: Annotated[Path, typer.Argument(help="Post file to load.")],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format."),
    ] = OutputFormat.yaml,
) -> None:
    """Print the normalized front matter of one post."""
    try:
        entry = load_post_file(path)
    except (LoadError, OSError) as e:
        err_console.print(f"[red]✗[/] {escape(str(e))}")
        raise typer.Exit(code=1) from None

    metadata = post_metadata(entry.post)
    if output_format is OutputFormat.json:
        print(json.dumps(metadata, ensure_ascii=False, indent=2, default=str))
    else:
        print(yaml.safe_dump(metadata, allow_unicode=True, sort_keys=False), end="")


@app.command("search-index")
def search_index(
    posts_dir: PostsDirArgument = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write JSON to this file instead of stdout."),
    ] = None,
    site_url: Annotated[
        str | None,
        typer.Option("--site-url", help="Base URL for post links."),
    ] = None,
) -> None:
    """Export the search.json index of published posts."""
    entries = _loader(posts_dir).posts()
    index = build_search_index(
        entries,
        site_url=settings.SITE_URL if site_url is None else site_url,
        content_chars=settings.SEARCH_CONTENT_CHARS,
    )
    text = json.dumps(index, ensure_ascii=False, indent=2)

    if output is None:
        print(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"Wrote {len(index)} posts to {escape(str(output))}")


@app.command()
def topics(
    posts_dir: PostsDirArgument = None,
    field: Annotated[
        TopicFieldOption,
        typer.Option("--field", help="Count tags or categories."),
    ] = TopicFieldOption.tags,
) -> None:
    """Show how many published posts use each tag or category."""
    counts = count_terms(_loader(posts_dir).posts(), cast(TopicField, field.value))
    if not counts:
        print(f"No {field.value} found.")
        return

    for name, count in counts:
        print(f"{count:>5}  {name}")


def main() -> None:
    app()
