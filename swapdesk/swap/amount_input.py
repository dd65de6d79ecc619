"""Free-text amount entry masking."""
from __future__ import annotations

import re
from dataclasses import dataclass

# Digits with at most one decimal point; the empty string is allowed.
_AMOUNT_RE = re.compile(r"^\d*\.?\d*$", re.ASCII)


def is_valid_amount_text(text: str) -> bool:
    """Return True for "", "12", "12.", ".5", "12.34"; False for "-1", "1e3", "1.2.3"."""
    return isinstance(text, str) and _AMOUNT_RE.fullmatch(text) is not None


@dataclass
class AmountInput:
    """Text field that ignores keystrokes producing an invalid amount."""

    value: str = ""

    def enter(self, text: str) -> bool:
        if not is_valid_amount_text(text):
            return False
        self.value = text
        return True
