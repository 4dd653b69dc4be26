import subprocess
import sys

from funlog import log_calls
from rich import get_console, reconfigure
from rich import print as rprint

SRC_PATHS = ["src", "tests", "devtools"]
# Tests are left out of type checking: fixtures and parametrized cases are loosely typed.
TYPECHECK_PATHS = ["src", "devtools"]
DOC_PATHS = ["README.md", "DESIGN.md"]


reconfigure(emoji=not get_console().options.legacy_windows)


def lint_commands(fix: bool) -> list[list[str]]:
    """Commands to run; with fix=False nothing is rewritten (for CI)."""
    if fix:
        return [
            ["codespell", "--write-changes", *SRC_PATHS, *DOC_PATHS],
            ["ruff", "check", "--fix", *SRC_PATHS],
            ["ruff", "format", *SRC_PATHS],
            ["basedpyright", "--stats", *TYPECHECK_PATHS],
        ]
    return [
        ["codespell", *SRC_PATHS, *DOC_PATHS],
        ["ruff", "check", *SRC_PATHS],
        ["ruff", "format", "--check", *SRC_PATHS],
        ["basedpyright", *TYPECHECK_PATHS],
    ]


def main(argv: list[str]) -> int:
    fix = "--check" not in argv
    rprint()

    errcount = sum(run(cmd) for cmd in lint_commands(fix))

    rprint()
    if errcount != 0:
        rprint(f"[bold red]:x: Lint failed with {errcount} errors.[/bold red]")
    else:
        rprint("[bold green]:white_check_mark: Lint passed![/bold green]")
    rprint()

    return errcount


@log_calls(level="warning", show_timing_only=True)
def run(cmd: list[str]) -> int:
    rprint()
    rprint(f"[bold green]>> {' '.join(cmd)}[/bold green]")
    try:
        subprocess.run(cmd, text=True, check=True)
    except KeyboardInterrupt:
        rprint("[yellow]Keyboard interrupt - Cancelled[/yellow]")
        return 1
    except subprocess.CalledProcessError as e:
        rprint(f"[bold red]Error: {e}[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
