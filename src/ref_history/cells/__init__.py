"""Observable value cells."""

from .cell import ChangeCallback, Subscription, ValueCell, same_value

__all__ = ["ChangeCallback", "Subscription", "ValueCell", "same_value"]
