"""Shopping cart: items, cart-level conditions, subtotal and total.

Cart state lives in a backing store under two keys derived from the session
key: one holding the items in insertion order, one holding the cart-level
conditions sorted by their ``order``. Every read rehydrates from the store and
every mutation writes the whole collection back before returning.
"""

from collections.abc import Iterable, Mapping

import structlog

from pricing.cart.hooks import CartHooks
from pricing.cart.quantity import update_quantity
from pricing.cart.store import CartStore
from pricing.condition.condition import Condition, ConditionTarget
from pricing.config import CartConfig
from pricing.exceptions import InvalidCondition
from pricing.item.item import CartItem
from pricing.item.validation import validate_item
from pricing.utils.numbers import format_value

logger = structlog.get_logger(__name__)

# Fields an update may replace; the item id is the cart key and stays fixed
_UPDATABLE_FIELDS = ("name", "price", "quantity", "attributes", "conditions")


class Cart:
    def __init__(
        self,
        store: CartStore,
        hooks: CartHooks | None = None,
        instance_name: str = "cart",
        session_key: str | None = None,
        config: CartConfig | None = None,
    ):
        self._store = store
        self._hooks = hooks or CartHooks()
        self._instance_name = instance_name

        session_key = session_key or instance_name
        self._items_key = f"{session_key}_cart_items"
        self._conditions_key = f"{session_key}_cart_conditions"

        self.config = config or CartConfig()

        self._hooks.created(self)

    @property
    def instance_name(self) -> str:
        return self._instance_name

    # -------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------
    def get_content(self) -> dict[str | int, CartItem]:
        """All items keyed by id, in the order they were added."""
        rows = self._store.get(self._items_key) or []
        items = {}
        for row in rows:
            item = CartItem(**row, config=self.config)
            items[item.id] = item
        return items

    def get(self, item_id) -> CartItem | None:
        return self.get_content().get(item_id)

    def has(self, item_id) -> bool:
        return item_id in self.get_content()

    def is_empty(self) -> bool:
        return not self.get_content()

    def get_total_quantity(self) -> int:
        return sum(item.quantity for item in self.get_content().values())

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add(self, item_id, name=None, price=None, quantity=None, attributes=None, conditions=None) -> bool:
        """Add an item, or merge it into the line with the same id.

        Merging adds ``quantity`` to the existing quantity and replaces the
        other fields. Raises ``InvalidItem`` when the item fails validation.
        """
        validate_item({"id": item_id, "name": name, "price": price, "quantity": quantity})

        item = CartItem(
            id=item_id,
            name=name,
            price=price,
            quantity=quantity,
            attributes=attributes,
            conditions=conditions,
            config=self.config,
        )

        if self.has(item_id):
            return self.update(
                item_id,
                {
                    "name": item.name,
                    "price": item.price,
                    "quantity": item.quantity,
                    "attributes": item.attributes,
                    "conditions": item.conditions,
                },
            )

        return self._add_row(item)

    def add_many(self, items: Mapping | Iterable[Mapping]) -> bool:
        """Add one item mapping or several; ``False`` if any addition was vetoed."""
        if isinstance(items, Mapping):
            items = [items]

        results = [
            self.add(
                row.get("id"),
                row.get("name"),
                row.get("price"),
                row.get("quantity"),
                row.get("attributes"),
                row.get("conditions"),
            )
            for row in items
        ]
        return all(results)

    def update(self, item_id, data: Mapping) -> bool:
        """Replace some fields of an existing item.

        ``quantity`` is relative unless given as ``{"value": n, "relative": False}``.
        Returns ``False`` when the item does not exist or the update is vetoed.
        """
        items = self.get_content()
        item = items.get(item_id)
        if item is None:
            return False

        if self._hooks.updating(data, self) is False:
            logger.warning("Cart update vetoed", cart=self.instance_name, item_id=item_id)
            return False

        fields = item.model_dump()
        for key, value in data.items():
            if key == "quantity":
                fields["quantity"] = update_quantity(item.quantity, value)
            elif key in _UPDATABLE_FIELDS:
                fields[key] = value

        updated = CartItem(**fields, config=self.config)
        items[item_id] = updated
        self._save(items)

        logger.info(
            "Cart item updated",
            cart=self.instance_name,
            item_id=item_id,
            fields=sorted(data),
            quantity=updated.quantity,
        )
        self._hooks.updated(updated, self)

        return True

    def remove(self, item_id) -> bool:
        items = self.get_content()
        if item_id not in items:
            return False

        if self._hooks.removing(item_id, self) is False:
            logger.warning("Cart item removal vetoed", cart=self.instance_name, item_id=item_id)
            return False

        del items[item_id]
        self._save(items)

        logger.info("Cart item removed", cart=self.instance_name, item_id=item_id)
        self._hooks.removed(item_id, self)

        return True

    def clear(self) -> bool:
        """Remove every item; cart-level conditions are kept."""
        if self._hooks.clearing(self) is False:
            logger.warning("Cart clear vetoed", cart=self.instance_name)
            return False

        self._store.put(self._items_key, [])

        logger.info("Cart cleared", cart=self.instance_name)
        self._hooks.cleared(self)

        return True

    def _add_row(self, item: CartItem) -> bool:
        if self._hooks.adding(item, self) is False:
            logger.warning("Cart item addition vetoed", cart=self.instance_name, item_id=item.id)
            return False

        items = self.get_content()
        items[item.id] = item
        self._save(items)

        logger.info(
            "Item added to cart",
            cart=self.instance_name,
            item_id=item.id,
            price=item.price,
            quantity=item.quantity,
        )
        self._hooks.added(item, self)

        return True

    def _save(self, items: dict[str | int, CartItem]) -> None:
        self._store.put(self._items_key, [item.model_dump() for item in items.values()])

    # -------------------------------------------------------------------
    # Item conditions
    # -------------------------------------------------------------------
    def add_item_condition(self, item_id, condition: Condition) -> "Cart":
        """Append ``condition`` to the conditions of an item already in the cart."""
        item = self.get(item_id)
        if item is not None and isinstance(condition, Condition):
            self.update(item_id, {"conditions": [*item.conditions, condition]})
        return self

    def remove_item_condition(self, item_id, condition_name: str) -> bool:
        item = self.get(item_id)
        if item is None:
            return False

        remaining = [condition for condition in item.conditions if condition.name != condition_name]
        self.update(item_id, {"conditions": remaining})

        return True

    def clear_item_conditions(self, item_id) -> bool:
        if not self.has(item_id):
            return False

        self.update(item_id, {"conditions": []})

        return True

    # -------------------------------------------------------------------
    # Cart conditions
    # -------------------------------------------------------------------
    def condition(self, condition: Condition | Iterable[Condition]) -> "Cart":
        """Add a cart-level condition, or several, replacing any with the same name.

        A condition without an order is placed after the current last one.
        """
        if isinstance(condition, (list, tuple)):
            for c in condition:
                self.condition(c)
            return self

        if not isinstance(condition, Condition):
            raise InvalidCondition({"condition": ["Argument must be an instance of Condition."]})

        conditions = self.get_conditions()

        if condition.get_order() == 0:
            last = next(reversed(conditions.values()), None)
            condition = condition.with_order(last.get_order() + 1 if last is not None else 1)

        conditions[condition.name] = condition
        self._save_conditions(sorted(conditions.values(), key=lambda c: c.get_order()))

        logger.info(
            "Cart condition added",
            cart=self.instance_name,
            condition=condition.name,
            condition_type=condition.type,
            order=condition.get_order(),
        )
        return self

    def get_conditions(self) -> dict[str, Condition]:
        """Cart-level conditions keyed by name, in ascending ``order``."""
        rows = self._store.get(self._conditions_key) or []
        conditions = {}
        for row in rows:
            condition = Condition(**row)
            conditions[condition.name] = condition
        return conditions

    def get_condition(self, condition_name: str) -> Condition | None:
        return self.get_conditions().get(condition_name)

    def get_conditions_by_type(self, condition_type: str) -> dict[str, Condition]:
        """Cart-level conditions of ``condition_type``; item conditions are not included."""
        return {name: c for name, c in self.get_conditions().items() if c.type == condition_type}

    def remove_conditions_by_type(self, condition_type: str) -> None:
        for name in self.get_conditions_by_type(condition_type):
            self.remove_cart_condition(name)

    def remove_cart_condition(self, condition_name: str) -> None:
        conditions = self.get_conditions()
        if conditions.pop(condition_name, None) is not None:
            logger.info("Cart condition removed", cart=self.instance_name, condition=condition_name)
        self._save_conditions(conditions.values())

    def clear_cart_conditions(self) -> None:
        self._store.put(self._conditions_key, [])

    def _save_conditions(self, conditions: Iterable[Condition]) -> None:
        self._store.put(self._conditions_key, [condition.model_dump() for condition in conditions])

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def get_subtotal(self, formatted: bool = True):
        """Sum of every line total with item conditions applied."""
        subtotal = sum(item.get_price_sum_with_conditions(False) for item in self.get_content().values())
        return format_value(float(subtotal), formatted, self.config)

    def get_total(self, formatted: bool = True):
        """Subtotal after chaining the subtotal-targeted conditions in ``order``."""
        total = self.get_subtotal(False)

        for condition in self.get_conditions().values():
            if condition.target == ConditionTarget.SUBTOTAL.value:
                total = condition.apply_condition(total)

        return format_value(total, formatted, self.config)
