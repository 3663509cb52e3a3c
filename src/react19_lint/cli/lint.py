from typing import Annotated

import typer
from rich.markup import escape

from react19_lint.cli.output import build_linter, console, err_console, fail, render_diagnostics, render_summary
from react19_lint.core.paths import iter_source_files
from react19_lint.models import FixResult, LintResult

PathsArgument = Annotated[list[str] | None, typer.Argument(help="Files or directories to check.")]
CodeOption = Annotated[str | None, typer.Option(help="Source code string to check instead of files.")]
LanguageOption = Annotated[str | None, typer.Option(help="Language name (javascript, typescript, tsx).")]
RuleOption = Annotated[list[str] | None, typer.Option("--rule", "-r", help="Rule id to enable; repeatable.")]


def _require_input(paths: list[str] | None, code: str | None) -> None:
    if not paths and code is None:
        raise fail("Provide at least one path or --code.")


def lint(
    paths: PathsArgument = None,
    code: CodeOption = None,
    language: LanguageOption = None,
    rule: RuleOption = None,
    output_format: Annotated[str, typer.Option("--format", help="Output format: text or json.")] = "text",
) -> None:
    """Report React 19 upgrade problems."""
    _require_input(paths, code)
    if output_format not in ("text", "json"):
        raise fail(f"Unknown format '{output_format}'. Use text or json.")
    linter = build_linter(rule)

    results: list[LintResult] = []
    failed = False
    try:
        if code is not None:
            results.append(linter.lint_source(code, language=language))
        for path in iter_source_files(paths or []):
            try:
                results.append(linter.lint_file(path, language))
            except (FileNotFoundError, ValueError) as exc:
                err_console.print(f"[red]{escape(str(exc))}[/red]")
                failed = True
    except ValueError as exc:
        raise fail(str(exc)) from None

    if output_format == "json":
        console.print_json(data=[r.model_dump(mode="json") for r in results])
    else:
        for result in results:
            render_diagnostics(result.path, result.diagnostics)
        render_summary(results)

    if failed:
        raise typer.Exit(2)
    if any(r.diagnostics for r in results):
        raise typer.Exit(1)


def fix(
    paths: PathsArgument = None,
    code: CodeOption = None,
    language: LanguageOption = None,
    rule: RuleOption = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Print fixed output instead of writing files.")] = False,
) -> None:
    """Apply automatic fixes, then report what is left."""
    _require_input(paths, code)
    linter = build_linter(rule)

    results: list[FixResult] = []
    failed = False
    try:
        if code is not None:
            result = linter.fix_source(code, language=language)
            typer.echo(result.output, nl=False)
            results.append(result)
        for path in iter_source_files(paths or []):
            try:
                result = linter.fix_file(path, language, write=not dry_run)
            except (FileNotFoundError, ValueError) as exc:
                err_console.print(f"[red]{escape(str(exc))}[/red]")
                failed = True
                continue
            if dry_run:
                typer.echo(result.output, nl=False)
            elif result.changed:
                err_console.print(f"[green]Fixed[/green] {result.applied} problem(s) in {result.path}")
            results.append(result)
    except ValueError as exc:
        raise fail(str(exc)) from None

    for result in results:
        if result.remaining:
            err_console.print(f"[yellow]{len(result.remaining)} problem(s) left[/yellow] in {result.path}")
            for d in result.remaining:
                err_console.print(f"  {d.start_point.row + 1}:{d.start_point.column + 1}  {d.rule_id}  {d.message}")

    if failed:
        raise typer.Exit(2)
    if any(r.remaining for r in results):
        raise typer.Exit(1)
