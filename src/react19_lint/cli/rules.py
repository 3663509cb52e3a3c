from rich.table import Table

from react19_lint.cli.output import console
from react19_lint.rules import aliases_of, select_rules


def list_rules() -> None:
    """List the available rules."""
    rules = select_rules()
    aliases = {rule_id: ", ".join(aliases_of(rule_id)) for rule_id in rules}

    table = Table(show_lines=False)
    table.add_column("rule", no_wrap=True, min_width=max(map(len, rules)))
    table.add_column("type")
    table.add_column("fixable")
    table.add_column("aliases", no_wrap=True, min_width=max(map(len, aliases.values())))
    table.add_column("description")
    for rule_id, rule in rules.items():
        table.add_row(
            rule_id,
            rule.meta.type,
            "yes" if rule.meta.fixable else "",
            aliases[rule_id],
            rule.meta.description,
        )
    console.print(table)
    console.print(f"({len(rules)} rules)")
