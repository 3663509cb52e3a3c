import asyncio
import contextlib
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from react19_lint.cli.lint import RuleOption
from react19_lint.cli.output import build_linter, console, err_console, fail, render_diagnostics
from react19_lint.watcher.watchfiles_adapter import WatchfilesWatcher


def watch(
    directory: Annotated[str, typer.Argument(help="Directory to watch.")] = ".",
    rule: RuleOption = None,
) -> None:
    """Re-lint JavaScript/TypeScript files whenever they change."""
    if not Path(directory).is_dir():
        raise fail(f"Not a directory: {directory}")
    linter = build_linter(rule)

    async def on_change(paths: set[Path]) -> None:
        for path in sorted(paths):
            try:
                result = await asyncio.to_thread(linter.lint_file, path)
            except (FileNotFoundError, ValueError) as exc:
                err_console.print(f"[red]{escape(str(exc))}[/red]")
                continue
            if result.diagnostics:
                render_diagnostics(result.path, result.diagnostics)
            else:
                console.print(f"[green]OK[/green] {result.path}")

    async def _run() -> None:
        watcher = WatchfilesWatcher(directory, on_change)
        await watcher.start()
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    console.print(f"[green]Watching[/green] {directory} (Ctrl+C to stop)")
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run())
