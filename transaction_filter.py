# transaction_filter.py

import math
from typing import List, Protocol, Sequence

from transaction import Transaction


class TransactionFilter(Protocol):
    def filter(self, transactions: Sequence[Transaction]) -> List[int]:
        """Return the positions of the matching transactions, in order."""
        ...


class AmountFilter:
    def __init__(self, amount: float) -> None:
        if amount is None or not math.isfinite(amount) or amount <= 0:
            raise ValueError(f"El monto del filtro debe ser positivo: {amount!r}")
        self.amount = amount

    def filter(self, transactions: Sequence[Transaction]) -> List[int]:
        return [i for i, t in enumerate(transactions) if math.isclose(t.amount, self.amount)]


class CategoryFilter:
    def __init__(self, category: str) -> None:
        if not category or not category.strip():
            raise ValueError("La categoría del filtro no puede estar vacía.")
        self.category = category.strip()

    def filter(self, transactions: Sequence[Transaction]) -> List[int]:
        wanted = self.category.casefold()
        return [i for i, t in enumerate(transactions) if t.category.strip().casefold() == wanted]
