import numpy as np
import pandas as pd
import pytest

from basket_mining.exceptions import InvalidInputError
from basket_mining.transactions import TransactionStore


def test_load_groups_and_deduplicates():
    store = TransactionStore.load([
        ('t1', 'milk'), ('t2', 'bread'), ('t1', 'bread'), ('t1', 'milk')
    ])

    assert store.size() == 2
    assert len(store) == 2
    assert [t.tid for t in store.transactions] == ['t1', 't2']
    assert store.transactions[0].items == frozenset({'milk', 'bread'})
    assert store.items == ('bread', 'milk')


def test_item_frequency(abc_store):
    assert abc_store.item_frequency('a') == 0.75
    assert abc_store.item_frequency('b') == 0.75
    assert abc_store.item_frequency('z') == 0.0


def test_count_and_support(abc_store):
    assert abc_store.count(['a', 'b']) == 2
    assert abc_store.count(['a', 'b', 'c']) == 1
    assert abc_store.count([]) == 4
    assert abc_store.support({'a', 'c'}) == 0.5
    assert abc_store.tid_list('a') == frozenset({0, 1, 3})


def test_empty_store():
    store = TransactionStore.load([])
    assert len(store) == 0
    assert store.items == ()
    assert store.item_frequency('a') == 0.0
    assert store.basket_sizes().empty
    assert store.item_frequencies().empty
    assert store.to_onehot().shape == (0, 0)


@pytest.mark.parametrize('item', ['', '   ', None, np.nan])
def test_empty_item_label_rejected(item):
    with pytest.raises(InvalidInputError):
        TransactionStore.load([('t1', 'milk'), ('t2', item)])


def test_missing_transaction_id_rejected():
    with pytest.raises(InvalidInputError):
        TransactionStore.load([(None, 'milk')])


def test_malformed_record_rejected():
    with pytest.raises(InvalidInputError):
        TransactionStore.load([('t1', 'milk', 'extra')])


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        TransactionStore.load([('t1', '')])


def test_non_string_items_become_labels():
    store = TransactionStore.load([(1, 10), (1, 20), (2, 10)])
    assert store.items == ('10', '20')
    assert store.item_frequency('10') == 1.0


def test_numeric_labels_found_by_value():
    store = TransactionStore.load([(1, 10), (1, 20), (2, 10)])

    assert store.item_frequency(10) == 1.0
    assert store.item_frequency(20) == 0.5
    assert store.count([10, 20]) == 1
    assert store.tid_list(10) == store.tid_list('10')


def test_text_and_numeric_label_clash_rejected():
    with pytest.raises(InvalidInputError):
        TransactionStore.load([(1, 1), (1, '1'), (2, 1)])


def test_from_frame():
    df = pd.DataFrame({
        'order': [1, 1, 2, 3, 3],
        'product': ['milk', 'bread', 'milk', 'bread', 'jam']
    })
    store = TransactionStore.from_frame(df, 'order', 'product')

    assert len(store) == 3
    assert store.item_frequency('milk') == pytest.approx(2 / 3)


def test_from_frame_missing_column():
    df = pd.DataFrame({'order': [1], 'product': ['milk']})
    with pytest.raises(InvalidInputError):
        TransactionStore.from_frame(df, 'order', 'item')


def test_basket_sizes(grocery_store):
    sizes = grocery_store.basket_sizes()

    assert sizes.name == 'basket_size'
    assert sizes['t5'] == 4
    assert sizes['t6'] == 2
    assert sizes.sum() == sum(len(t) for t in grocery_store)


def test_item_frequencies_sorted(grocery_store):
    freqs = grocery_store.item_frequencies()

    assert list(freqs.index[:2]) == ['bread', 'milk']
    assert freqs['milk'] == pytest.approx(6 / 12)
    assert freqs.is_monotonic_decreasing

    counts = grocery_store.item_frequencies(top_n=3, relative=False)
    assert len(counts) == 3
    assert counts['bread'] == 6


def test_to_onehot(abc_store):
    onehot = abc_store.to_onehot()

    assert list(onehot.columns) == ['a', 'b', 'c']
    assert onehot.shape == (4, 3)
    assert onehot.dtypes.eq(bool).all()
    assert onehot.sum().tolist() == [3, 3, 3]
