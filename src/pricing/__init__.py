"""Shopping cart pricing engine.

Items and cart-level conditions, with subtotal and total computed by folding
ordered pricing conditions over item prices and the cart subtotal.
"""

from pricing.cart.cart import Cart
from pricing.cart.hooks import CartHooks, EventSinkHooks
from pricing.cart.store import CartStore, InMemoryStore
from pricing.condition.condition import Condition, ConditionTarget
from pricing.config import CartConfig
from pricing.exceptions import CartError, InvalidCondition, InvalidItem
from pricing.item.item import CartItem

__all__ = [
    "Cart",
    "CartConfig",
    "CartError",
    "CartHooks",
    "CartItem",
    "CartStore",
    "Condition",
    "ConditionTarget",
    "EventSinkHooks",
    "InMemoryStore",
    "InvalidCondition",
    "InvalidItem",
]
