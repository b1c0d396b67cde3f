import pytest

from basket_mining.transactions import TransactionStore


@pytest.fixture
def abc_store():
    """{a,b}, {a,b,c}, {b,c}, {a,c}"""
    return TransactionStore.load([
        (1, 'a'), (1, 'b'),
        (2, 'a'), (2, 'b'), (2, 'c'),
        (3, 'b'), (3, 'c'),
        (4, 'a'), (4, 'c'),
    ])


@pytest.fixture
def grocery_store():
    baskets = {
        't1': ['milk', 'bread', 'butter'],
        't2': ['milk', 'bread'],
        't3': ['bread', 'butter', 'jam'],
        't4': ['milk', 'eggs'],
        't5': ['milk', 'bread', 'butter', 'eggs'],
        't6': ['beer', 'chips'],
        't7': ['beer', 'chips', 'salsa'],
        't8': ['milk', 'bread', 'butter'],
        't9': ['beer', 'chips'],
        't10': ['bread', 'jam'],
        't11': ['milk', 'butter'],
        't12': ['beer', 'salsa', 'chips'],
    }
    return TransactionStore.load(
        (tid, item) for tid, items in baskets.items() for item in items
    )
