import pytest

from pricing.cart.cart import Cart
from pricing.cart.store import InMemoryStore
from pricing.config import CartConfig


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def cart(store):
    return Cart(store, instance_name="shopping")


@pytest.fixture
def formatted_config():
    return CartConfig(format_numbers=True, decimals=2, dec_point=".", thousands_sep=",")
