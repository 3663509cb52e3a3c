import logging
from collections.abc import Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from react19_lint.config import load_config
from react19_lint.core.linter import Linter
from react19_lint.models import Diagnostic, LintResult

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def fail(message: str, code: int = 2) -> typer.Exit:
    err_console.print(f"[red]{escape(message)}[/red]")
    return typer.Exit(code)


def build_linter(rules: list[str] | None) -> Linter:
    try:
        return Linter(config=load_config(rules=rules))
    except KeyError as exc:
        raise fail(str(exc.args[0])) from None
    except ValueError as exc:
        raise fail(str(exc)) from None


def render_diagnostics(path: str, diagnostics: Sequence[Diagnostic]) -> None:
    if not diagnostics:
        return
    table = Table(title=path, title_justify="left", show_lines=False)
    table.add_column("line:col", justify="right")
    table.add_column("rule", no_wrap=True, min_width=max(len(d.rule_id) for d in diagnostics))
    table.add_column("message")
    table.add_column("fix")
    for d in diagnostics:
        table.add_row(
            f"{d.start_point.row + 1}:{d.start_point.column + 1}",
            d.rule_id,
            d.message,
            "yes" if d.fixable else "",
        )
    console.print(table)


def render_summary(results: Sequence[LintResult]) -> None:
    total = sum(len(r.diagnostics) for r in results)
    fixable = sum(r.fixable_count for r in results)
    if total == 0:
        console.print(f"[green]No problems[/green] in {len(results)} file(s)")
        return
    console.print(f"[yellow]{total} problem(s)[/yellow] ({fixable} fixable) in {len(results)} file(s)")
