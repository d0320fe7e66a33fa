"""Rules an item must satisfy before it is accepted into a cart."""

from collections.abc import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from pricing.exceptions import InvalidItem, messages_from_pydantic


class ItemRules(BaseModel):
    id: str | int
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)

    @field_validator("id", "name", "price", "quantity", mode="before")
    @classmethod
    def _required(cls, value, info):
        if value is None or (isinstance(value, str) and value.strip() == ""):
            raise ValueError(f"The {info.field_name} field is required.")
        return value


def validate_item(data: Mapping) -> None:
    """Raise ``InvalidItem`` with the first failing rule's message."""
    try:
        ItemRules(**{field: data.get(field) for field in ItemRules.model_fields})
    except ValidationError as exc:
        raise InvalidItem(messages_from_pydantic(exc)) from exc
