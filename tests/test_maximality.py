import pytest

from basket_mining.exceptions import EmptyRuleSetError
from basket_mining.postprocessing import implies, is_maximal, filter_maximal, count_non_maximal
from basket_mining.rule_mining import EclatMiner, RuleGenerator
from basket_mining.transactions import Rule


def make_rule(lhs, rhs, support, confidence):
    return Rule(
        lhs=frozenset(lhs),
        rhs=frozenset(rhs),
        support=support,
        confidence=confidence,
        lift=1.0,
        coverage=support / confidence,
        count=int(support * 100)
    )


def test_more_general_rule_implies_specific():
    general = make_rule('a', 'c', 0.5, 0.8)
    specific = make_rule('ab', 'c', 0.4, 0.7)

    assert implies(general, specific)
    assert not implies(specific, general)
    assert not is_maximal(specific, [general, specific])
    assert is_maximal(general, [general, specific])


def test_wider_rhs_implies():
    general = make_rule('a', 'cd', 0.5, 0.8)
    specific = make_rule('ab', 'c', 0.4, 0.7)
    assert implies(general, specific)


def test_higher_confidence_keeps_specific_rule():
    general = make_rule('a', 'c', 0.5, 0.6)
    specific = make_rule('ab', 'c', 0.4, 0.9)

    assert not implies(general, specific)
    assert is_maximal(specific, [general, specific])


def test_same_lhs_is_not_more_general():
    r1 = make_rule('a', 'c', 0.5, 0.8)
    r2 = make_rule('a', 'cd', 0.5, 0.8)
    assert not implies(r2, r1)


def test_equal_metrics_count_as_generalization():
    general = make_rule('a', 'c', 0.4, 0.8)
    specific = make_rule('ab', 'c', 0.4, 0.8)
    assert implies(general, specific)


def test_filter_maximal():
    rules = [
        make_rule('a', 'c', 0.5, 0.8),
        make_rule('ab', 'c', 0.4, 0.7),
        make_rule('b', 'd', 0.3, 0.6),
        make_rule('ab', 'd', 0.3, 0.9),
    ]
    kept = filter_maximal(rules)

    assert kept == [rules[0], rules[2], rules[3]]
    assert count_non_maximal(rules) == 1


def test_filter_maximal_is_idempotent(grocery_store):
    itemsets = EclatMiner(min_support=0.05).mine(grocery_store)
    rules = RuleGenerator(min_confidence=0.3).generate(itemsets)

    once = filter_maximal(rules)
    assert len(once) < len(rules)
    assert filter_maximal(once) == once
    assert all(is_maximal(r, once) for r in once)
    assert count_non_maximal(once) == 0


def test_removed_rules_have_generalization(grocery_store):
    itemsets = EclatMiner(min_support=0.05).mine(grocery_store)
    rules = RuleGenerator(min_confidence=0.3).generate(itemsets)
    kept = set(filter_maximal(rules))

    for rule in rules:
        if rule not in kept:
            assert any(implies(other, rule) for other in rules)


def test_filter_maximal_does_not_mutate_input():
    rules = [make_rule('a', 'c', 0.5, 0.8), make_rule('ab', 'c', 0.4, 0.7)]
    snapshot = list(rules)
    filter_maximal(rules)
    assert rules == snapshot


def test_filter_maximal_empty_raises():
    with pytest.raises(EmptyRuleSetError):
        filter_maximal([])


def test_count_non_maximal_empty():
    assert count_non_maximal([]) == 0
