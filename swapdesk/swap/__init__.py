"""Swap form modules."""
from .amount_input import AmountInput, is_valid_amount_text
from .form import FormState, SwapForm

__all__ = ["AmountInput", "FormState", "SwapForm", "is_valid_amount_text"]
