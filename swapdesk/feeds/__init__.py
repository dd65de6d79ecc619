"""Price feed implementations."""
from .switcheo import SwitcheoFeed

__all__ = ["SwitcheoFeed"]
