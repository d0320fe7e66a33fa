"""Pricing conditions: named adjustments applied to an item price or a cart subtotal.

A condition's ``value`` is a string such as ``"-10%"``, ``"+5"`` or ``"12.5"``.
A ``%`` makes the adjustment a percentage of the amount it is applied to; a
``-`` subtracts, anything else adds. The result never drops below zero.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, field_validator, model_validator

from pricing.exceptions import InvalidCondition, messages_from_pydantic
from pricing.utils.numbers import normalize_price

REQUIRED_ARGS = ("name", "type", "target", "value")


class ConditionTarget(Enum):
    ITEM = "item"
    SUBTOTAL = "subtotal"


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def _is_nested(args) -> bool:
    """True when ``args`` describes more than one condition at once."""
    if not isinstance(args, Mapping):
        return True
    return any(isinstance(v, (Mapping, list, tuple)) for k, v in args.items() if k != "attributes")


class Condition(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str
    type: str
    target: ConditionTarget
    value: str
    order: int = 0
    attributes: dict[str, Any] = Field(default_factory=dict)

    # Amount computed by the most recent ``apply`` call
    _parsed_raw_value: float | None = PrivateAttr(default=None)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidCondition(messages_from_pydantic(exc)) from exc

    @model_validator(mode="before")
    @classmethod
    def _check_args(cls, data):
        if isinstance(data, Condition):
            return data

        if _is_nested(data):
            raise InvalidCondition({"_entity": ["Multi dimensional condition arguments are not supported."]})

        missing = {arg: [f"The {arg} field is required."] for arg in REQUIRED_ARGS if _is_blank(data.get(arg))}
        if missing:
            raise InvalidCondition(missing)

        return data

    @field_validator("name", "type", "value", mode="before")
    @classmethod
    def _stringify(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("order", mode="before")
    @classmethod
    def _coerce_order(cls, value):
        if value is None or isinstance(value, bool):
            return 0
        try:
            return int(float(str(value).strip()))
        except (ValueError, OverflowError):
            return 0

    @field_validator("attributes", mode="before")
    @classmethod
    def _default_attributes(cls, value):
        return {} if value is None else value

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def from_args(cls, args) -> "Condition":
        """Build a condition from a single mapping of arguments."""
        if _is_nested(args):
            raise InvalidCondition({"_entity": ["Multi dimensional condition arguments are not supported."]})
        return cls(**dict(args))

    # -------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------
    def get_order(self) -> int:
        """The position of this condition in a cart chain; 0 means unassigned."""
        return self.order

    def with_order(self, order: int) -> "Condition":
        return self.model_copy(update={"order": int(order)})

    def get_attributes(self) -> dict[str, Any]:
        return self.attributes

    @property
    def parsed_raw_value(self) -> float | None:
        return self._parsed_raw_value

    # -------------------------------------------------------------------
    # Calculation
    # -------------------------------------------------------------------
    def apply_condition(self, amount: float) -> float:
        """Apply this condition to a price, subtotal or total."""
        return self.apply(amount, self.value)

    def get_calculated_value(self, amount: float) -> float:
        """The absolute adjustment this condition makes to ``amount``."""
        self.apply(amount, self.value)
        return self._parsed_raw_value

    def apply(self, amount: float, condition_value: str) -> float:
        amount = normalize_price(amount)
        condition_value = str(condition_value)

        if self._is_percentage(condition_value):
            if self._is_to_be_subtracted(condition_value):
                self._parsed_raw_value = amount * (self._clean_value(condition_value) / 100)
                result = amount - self._parsed_raw_value
            elif self._is_to_be_added(condition_value):
                self._parsed_raw_value = amount * (self._clean_value(condition_value) / 100)
                result = amount + self._parsed_raw_value
            else:
                self._parsed_raw_value = amount * (self._clean_value(condition_value) / 100)
                result = amount + self._parsed_raw_value
        else:
            if self._is_to_be_subtracted(condition_value):
                self._parsed_raw_value = self._clean_value(condition_value)
                result = amount - self._parsed_raw_value
            elif self._is_to_be_added(condition_value):
                self._parsed_raw_value = self._clean_value(condition_value)
                result = amount + self._parsed_raw_value
            else:
                self._parsed_raw_value = self._clean_value(condition_value)
                result = amount + self._parsed_raw_value

        # Prices never go negative
        return 0.0 if result < 0 else float(result)

    @staticmethod
    def _is_percentage(value: str) -> bool:
        return "%" in value

    @staticmethod
    def _is_to_be_subtracted(value: str) -> bool:
        return "-" in value

    @staticmethod
    def _is_to_be_added(value: str) -> bool:
        return "+" in value

    @staticmethod
    def _clean_value(value: str) -> float:
        for sign in ("%", "-", "+"):
            value = value.replace(sign, "")
        return normalize_price(value)
