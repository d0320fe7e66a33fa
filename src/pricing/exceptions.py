"""Errors raised by the cart pricing engine.

Errors are protean ``ValidationError``s carrying a ``messages`` mapping of
``{field: [message, ...]}`` so callers can report every failing field.
"""

from protean.exceptions import ValidationError


class CartError(ValidationError):
    @property
    def first_message(self) -> str:
        for errors in self.messages.values():
            if errors:
                return errors[0]
        return ""


class InvalidItem(CartError):
    """An item failed validation before entering the cart."""


class InvalidCondition(CartError):
    """A condition was built from malformed arguments."""


def messages_from_pydantic(exc) -> dict[str, list[str]]:
    """Flatten a pydantic ``ValidationError`` into ``{field: [message]}``."""
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else "_entity"
        message = error["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages.setdefault(field, []).append(message)
    return messages
