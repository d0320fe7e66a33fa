"""Cart item: a line in the cart and the pricing of that line."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from pricing.condition.condition import Condition, ConditionTarget
from pricing.config import CartConfig
from pricing.exceptions import InvalidItem, messages_from_pydantic
from pricing.utils.numbers import format_value


class CartItem(BaseModel):
    id: str | int
    name: str
    price: float
    quantity: int
    attributes: dict[str, Any] = Field(default_factory=dict)
    conditions: list[Condition] = Field(default_factory=list)
    config: CartConfig = Field(default_factory=CartConfig, exclude=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidItem(messages_from_pydantic(exc)) from exc

    @field_validator("attributes", mode="before")
    @classmethod
    def _default_attributes(cls, value):
        return {} if value is None else value

    @field_validator("conditions", mode="before")
    @classmethod
    def _as_sequence(cls, value):
        """Accept no condition, a single condition, or a sequence of them."""
        if value is None:
            return []
        if isinstance(value, (Condition, Mapping)):
            return [value]
        return list(value)

    # -------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------
    def get_attribute(self, name: str, default=None):
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def has_conditions(self) -> bool:
        return len(self.conditions) > 0

    def get_price_sum(self, formatted: bool = True):
        """Unit price times quantity, ignoring conditions."""
        return format_value(self.price * self.quantity, formatted, self.config)

    def get_price_with_conditions(self, formatted: bool = True):
        """Unit price after every item-targeted condition, applied in list order."""
        price = self.price
        for condition in self.conditions:
            if condition.target == ConditionTarget.ITEM.value:
                price = condition.apply_condition(price)

        return format_value(price, formatted, self.config)

    def get_price_sum_with_conditions(self, formatted: bool = True):
        return format_value(self.get_price_with_conditions(False) * self.quantity, formatted, self.config)
