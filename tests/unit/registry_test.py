"""Tests for the rule registry."""

import pytest

from react19_lint.rules import RULES, aliases_of, get_rule, select_rules

CANONICAL = ["no-default-props", "no-prop-types", "no-legacy-context", "no-string-refs", "no-factories"]


def test_select_all_returns_canonical_rules() -> None:
    assert list(select_rules()) == CANONICAL


def test_rule_ids_match_registry_keys() -> None:
    for rule_id, rule in select_rules().items():
        assert rule.meta.rule_id == rule_id


def test_aliases_resolve_to_same_rule() -> None:
    assert RULES["no-defaultprops"] is RULES["no-default-props"]
    assert RULES["no-proptypes"] is RULES["no-prop-types"]
    assert aliases_of("no-default-props") == ["no-defaultprops"]
    assert aliases_of("no-string-refs") == []


def test_select_by_alias_uses_canonical_id() -> None:
    assert list(select_rules(["no-defaultprops", "no-default-props"])) == ["no-default-props"]


def test_unknown_rule() -> None:
    with pytest.raises(KeyError, match="Unknown rule 'no-mixins'"):
        get_rule("no-mixins")


def test_only_default_props_is_fixable() -> None:
    fixable = [rule_id for rule_id, rule in select_rules().items() if rule.meta.fixable]
    assert fixable == ["no-default-props"]


@pytest.mark.parametrize("rule_id", CANONICAL)
def test_meta_is_complete(rule_id: str) -> None:
    meta = get_rule(rule_id).meta
    assert meta.description
    assert meta.messages
    assert meta.url is not None and meta.url.startswith("https://react.dev/")
