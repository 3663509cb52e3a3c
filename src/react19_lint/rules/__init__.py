from collections.abc import Iterable

from react19_lint.core.ports.rule import Rule
from react19_lint.rules.no_default_props import NoDefaultProps
from react19_lint.rules.no_factories import NoFactories
from react19_lint.rules.no_legacy_context import NoLegacyContext
from react19_lint.rules.no_prop_types import NoPropTypes
from react19_lint.rules.no_string_refs import NoStringRefs

_no_default_props = NoDefaultProps()
_no_prop_types = NoPropTypes()

RULES: dict[str, Rule] = {
    "no-default-props": _no_default_props,
    "no-prop-types": _no_prop_types,
    "no-legacy-context": NoLegacyContext(),
    "no-string-refs": NoStringRefs(),
    "no-factories": NoFactories(),
    # same rules, spelled without the inner dash
    "no-defaultprops": _no_default_props,
    "no-proptypes": _no_prop_types,
}


def get_rule(name: str) -> Rule:
    try:
        return RULES[name]
    except KeyError:
        raise KeyError(f"Unknown rule '{name}'. Known rules: {sorted(RULES)}") from None


def aliases_of(rule_id: str) -> list[str]:
    rule = get_rule(rule_id)
    return [name for name, candidate in RULES.items() if candidate is rule and name != rule.meta.rule_id]


def select_rules(names: Iterable[str] | None = None) -> dict[str, Rule]:
    """Rules keyed by canonical id; aliases resolve to the rule they name. ``None`` selects every rule."""
    if names is None:
        return {name: rule for name, rule in RULES.items() if name == rule.meta.rule_id}
    selected: dict[str, Rule] = {}
    for name in names:
        rule = get_rule(name)
        selected[rule.meta.rule_id] = rule
    return selected


__all__ = [
    "RULES",
    "NoDefaultProps",
    "NoFactories",
    "NoLegacyContext",
    "NoPropTypes",
    "NoStringRefs",
    "aliases_of",
    "get_rule",
    "select_rules",
]
