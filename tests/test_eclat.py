from itertools import combinations

import pytest

from basket_mining.exceptions import InvalidParameterError
from basket_mining.rule_mining import EclatMiner
from basket_mining.transactions import TransactionStore


def as_dict(itemsets):
    return {frozenset(i.items): i.support for i in itemsets}


def test_abc_scenario(abc_store):
    itemsets = EclatMiner(min_support=0.5).mine(abc_store)

    assert as_dict(itemsets) == {
        frozenset('a'): 0.75,
        frozenset('b'): 0.75,
        frozenset('c'): 0.75,
        frozenset('ab'): 0.5,
        frozenset('bc'): 0.5,
        frozenset('ac'): 0.5,
    }
    assert frozenset('abc') not in as_dict(itemsets)


def test_counts_match_store(grocery_store):
    for itemset in EclatMiner(min_support=0.1).mine(grocery_store):
        assert itemset.count == grocery_store.count(itemset.items)
        assert itemset.support == itemset.count / len(grocery_store)


def test_support_threshold_respected(grocery_store):
    itemsets = EclatMiner(min_support=0.25).mine(grocery_store)
    assert itemsets
    assert all(i.support >= 0.25 for i in itemsets)


def test_anti_monotone(grocery_store):
    supports = as_dict(EclatMiner(min_support=0.05).mine(grocery_store))
    for items, support in supports.items():
        for size in range(1, len(items)):
            for subset in combinations(items, size):
                assert supports[frozenset(subset)] >= support


def test_no_duplicates(grocery_store):
    itemsets = EclatMiner(min_support=0.0).mine(grocery_store)
    keys = [i.items for i in itemsets]
    assert len(keys) == len(set(keys))


def test_length_range(grocery_store):
    itemsets = EclatMiner(min_support=0.05, min_len=2, max_len=2).mine(grocery_store)
    assert itemsets
    assert all(len(i) == 2 for i in itemsets)


def test_min_len_greater_than_max_len_is_empty(abc_store):
    assert EclatMiner(min_support=0.1, min_len=3, max_len=2).mine(abc_store) == []


def test_zero_support_is_exhaustive(grocery_store):
    itemsets = EclatMiner(min_support=0.0, max_len=len(grocery_store.items)).mine(grocery_store)
    mined = {i.items for i in itemsets}

    for transaction in grocery_store:
        for size in range(1, len(transaction.items) + 1):
            for subset in combinations(sorted(transaction.items), size):
                assert frozenset(subset) in mined
    assert all(i.count > 0 for i in itemsets)


def test_empty_store_gives_empty_result():
    assert EclatMiner(min_support=0.5).mine(TransactionStore.load([])) == []


def test_output_order(grocery_store):
    itemsets = EclatMiner(min_support=0.1).mine(grocery_store)
    keys = [(len(i), i.sorted_items) for i in itemsets]
    assert keys == sorted(keys)


def test_mine_itemsets_stats(abc_store):
    itemsets, stats = EclatMiner(min_support=0.5).mine_itemsets(abc_store)

    assert stats['num_itemsets'] == 6
    assert stats['max_length'] == 2
    assert stats['algorithm'] == 'eclat'
    assert stats['mode'] == 'itemsets'
    assert stats['average_support'] == pytest.approx(0.625)


@pytest.mark.parametrize('kwargs', [
    {'min_support': -0.1},
    {'min_support': 1.5},
    {'min_support': '0.5'},
    {'min_support': None},
    {'min_support': True},
    {'min_support': 0.1, 'min_len': 0},
])
def test_invalid_parameters(kwargs):
    with pytest.raises(InvalidParameterError):
        EclatMiner(**kwargs)
