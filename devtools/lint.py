"""Run the project's checks: spelling, ruff, ty and the test suite.

    python devtools/lint.py           # fix what can be fixed, then check
    python devtools/lint.py --check   # report only (CI)
"""

import argparse
import subprocess
import sys
from pathlib import Path

from funlog import log_calls
from rich import get_console, reconfigure
from rich import print as rprint

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATHS = [str(PROJECT_ROOT / name) for name in ("src", "tests", "devtools")]
DOC_PATHS = [str(PROJECT_ROOT / "README.md")]

reconfigure(emoji=not get_console().options.legacy_windows)


def steps(check_only: bool) -> list[list[str]]:
    if check_only:
        spelling = ["codespell", *SRC_PATHS, *DOC_PATHS]
        ruff = [["ruff", "check", *SRC_PATHS], ["ruff", "format", "--check", *SRC_PATHS]]
    else:
        spelling = ["codespell", "--write-changes", *SRC_PATHS, *DOC_PATHS]
        ruff = [["ruff", "check", "--fix", *SRC_PATHS], ["ruff", "format", *SRC_PATHS]]
    return [
        spelling,
        *ruff,
        ["ty", "check", "--project", str(PROJECT_ROOT), *SRC_PATHS],
        [sys.executable, "-m", "pytest", "-q", str(PROJECT_ROOT / "tests")],
    ]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--check", action="store_true", help="Report problems without fixing them.")
    args = parser.parse_args(argv)

    rprint()
    errcount = sum(run(cmd) for cmd in steps(args.check))
    rprint()

    if errcount:
        rprint(f"[bold red]:x: {errcount} of the checks failed.[/bold red]")
    else:
        rprint("[bold green]:white_check_mark: All checks passed![/bold green]")
    rprint()
    return errcount


@log_calls(level="warning", show_timing_only=True)
def run(cmd: list[str]) -> int:
    rprint()
    rprint(f"[bold green]:arrow_forward: {' '.join(cmd)}[/bold green]")
    try:
        subprocess.run(cmd, text=True, check=True, cwd=PROJECT_ROOT)
    except subprocess.CalledProcessError as e:
        rprint(f"[bold red]Error: {e}[/bold red]")
        return 1
    except FileNotFoundError as e:
        rprint(f"[bold red]Executable not found: {e}[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
