"""Balance source protocol — wallet balances collaborator."""
from typing import Protocol

from ..models import Balance


class BalanceSource(Protocol):
    """Abstract interface for reading wallet balances."""

    def get_balances(self) -> list[Balance]: ...
