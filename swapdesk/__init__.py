"""Token swap desk: price feed normalization, wallet ranking and swap quotes."""

__version__ = "0.1.0"
