from typing import Annotated

import typer

from react19_lint.cli.lint import fix, lint
from react19_lint.cli.output import configure_logging
from react19_lint.cli.rules import list_rules
from react19_lint.cli.watch import watch

app = typer.Typer(
    name="react19-lint",
    help="React 19 upgrade linter: find and fix removed React APIs.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")] = False,
) -> None:
    configure_logging(verbose)


app.command("lint")(lint)
app.command("fix")(fix)
app.command("rules")(list_rules)
app.command("watch")(watch)


def main() -> None:
    app()
