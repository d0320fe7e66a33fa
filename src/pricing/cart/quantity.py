"""Quantity change instructions used when updating a cart item.

A bare value is a relative change: ``"-2"`` decrements, ``"+2"`` or ``2``
increments. A mapping ``{"value": ..., "relative": bool}`` makes the choice
explicit; with ``relative`` false the quantity is replaced outright.
"""

from collections.abc import Mapping

from pricing.utils.numbers import normalize_price


def _to_int(value) -> int:
    return int(normalize_price(value))


def update_quantity(current: int, instruction) -> int:
    """Return the quantity that results from applying ``instruction`` to ``current``."""
    if isinstance(instruction, Mapping):
        if "relative" not in instruction:
            return current
        if bool(instruction["relative"]):
            return update_quantity_relative(current, instruction.get("value"))
        return update_quantity_absolute(current, instruction.get("value"))

    return update_quantity_relative(current, instruction)


def update_quantity_relative(current: int, value) -> int:
    text = str(value)

    if "-" in text:
        decrement = _to_int(text.replace("-", ""))
        # Quantity never drops to zero through a relative change
        if current - decrement > 0:
            return current - decrement
        return current

    if "+" in text:
        return current + _to_int(text.replace("+", ""))

    return current + _to_int(value)


def update_quantity_absolute(current: int, value) -> int:
    return _to_int(value)
