"""Service modules"""
from .desk import DeskState, SwapDesk
from .snapshot import PriceSnapshot

__all__ = ["DeskState", "PriceSnapshot", "SwapDesk"]
