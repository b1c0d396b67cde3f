import pytest

from basket_mining.exceptions import InvalidParameterError
from basket_mining.rule_mining import EclatMiner, RuleGenerator
from basket_mining.transactions import Itemset


def find(rules, lhs, rhs):
    matches = [r for r in rules if r.lhs == frozenset(lhs) and r.rhs == frozenset(rhs)]
    assert len(matches) == 1
    return matches[0]


def test_a_implies_b(abc_store):
    itemsets = EclatMiner(min_support=0.5).mine(abc_store)
    rules = RuleGenerator(min_confidence=0.0).generate(itemsets)

    rule = find(rules, 'a', 'b')
    assert rule.support == 0.5
    assert rule.confidence == pytest.approx(0.667, abs=1e-3)
    assert rule.lift == pytest.approx(0.889, abs=1e-3)
    assert rule.coverage == 0.75
    assert rule.count == 2


def test_every_split_of_pairs(abc_store):
    itemsets = EclatMiner(min_support=0.5).mine(abc_store)
    rules = RuleGenerator(min_confidence=0.0).generate(itemsets)

    assert len(rules) == 6
    assert all(not (r.lhs & r.rhs) for r in rules)


def test_confidence_threshold_and_formula(grocery_store):
    itemsets = EclatMiner(min_support=0.05).mine(grocery_store)
    supports = {i.items: i.support for i in itemsets}
    rules = RuleGenerator(min_confidence=0.6).generate(itemsets)

    assert rules
    for rule in rules:
        assert rule.confidence >= 0.6
        assert rule.confidence == supports[rule.items] / supports[rule.lhs]
        assert rule.lift == rule.confidence / supports[rule.rhs]
        assert rule.coverage == supports[rule.lhs]
        assert rule.support == supports[rule.items]


def test_missing_subset_support_skips_split():
    itemsets = [
        Itemset(frozenset({'a'}), 3, 0.75),
        Itemset(frozenset({'a', 'b'}), 2, 0.5),
    ]
    rules = RuleGenerator(min_confidence=0.0).generate(itemsets)

    # {b} is unknown: it cannot be an lhs, and {a} -> {b} has no lift
    assert rules == []


def test_min_len(grocery_store):
    itemsets = EclatMiner(min_support=0.05).mine(grocery_store)
    rules = RuleGenerator(min_confidence=0.0, min_len=3).generate(itemsets)

    assert rules
    assert all(len(r.items) >= 3 for r in rules)


def test_singletons_give_no_rules(abc_store):
    itemsets = EclatMiner(min_support=0.5, max_len=1).mine(abc_store)
    assert RuleGenerator(min_confidence=0.0).generate(itemsets) == []


def test_generate_rules_stats(abc_store):
    itemsets = EclatMiner(min_support=0.5).mine(abc_store)
    rules, stats = RuleGenerator(min_confidence=0.5).generate_rules(itemsets)

    assert stats['num_rules'] == len(rules) == 6
    assert stats['average_confidence'] == pytest.approx(2 / 3)
    assert stats['mode'] == 'rules'
    assert stats['algorithm'] == 'rule_generator'


def test_str(abc_store):
    itemsets = EclatMiner(min_support=0.5).mine(abc_store)
    rule = find(RuleGenerator(min_confidence=0.0).generate(itemsets), 'a', 'b')
    assert str(rule) == "{a} => {b}"


@pytest.mark.parametrize('kwargs', [
    {'min_confidence': 1.2},
    {'min_confidence': -0.5},
    {'min_confidence': '0.5'},
    {'min_confidence': 0.5, 'min_len': 0},
])
def test_invalid_parameters(kwargs):
    with pytest.raises(InvalidParameterError):
        RuleGenerator(**kwargs)
