"""Product domain constants."""

from enum import StrEnum


class StockDecrement(StrEnum):
    """Outcome of a conditional stock decrement."""

    SUCCESS = "success"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NOT_FOUND = "not_found"
