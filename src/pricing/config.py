"""Display configuration shared by a cart and the items it holds."""

import os

from pydantic import BaseModel, ConfigDict, Field

_TRUTHY = {"1", "true", "yes", "on"}


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v
    return default


class CartConfig(BaseModel):
    """Number formatting options consulted at every formatting boundary."""

    model_config = ConfigDict(frozen=True)

    format_numbers: bool = False
    decimals: int = Field(default=0, ge=0)
    dec_point: str = "."
    thousands_sep: str = ","

    @classmethod
    def from_env(cls, prefix: str = "CART_") -> "CartConfig":
        values = {}

        format_numbers = _get_env(f"{prefix}FORMAT_NUMBERS")
        if format_numbers is not None:
            values["format_numbers"] = format_numbers.strip().lower() in _TRUTHY

        decimals = _get_env(f"{prefix}DECIMALS")
        if decimals is not None:
            values["decimals"] = int(decimals)

        dec_point = _get_env(f"{prefix}DEC_POINT")
        if dec_point is not None:
            values["dec_point"] = dec_point

        thousands_sep = _get_env(f"{prefix}THOUSANDS_SEP")
        if thousands_sep is not None:
            values["thousands_sep"] = thousands_sep

        return cls(**values)
