# transaction.py

from dataclasses import dataclass, field
import datetime
import math

DEFAULT_CATEGORY = "NO ASIGNADA"


# eq=False: two entries with the same fields are still two distinct records
@dataclass(frozen=True, eq=False)
class Transaction:
    amount: float
    category: str
    store_name: str = ""
    date: datetime.date = field(default_factory=datetime.date.today)

    def __post_init__(self) -> None:
        if self.amount is None or not math.isfinite(self.amount) or self.amount <= 0:
            raise ValueError(f"El monto debe ser positivo: {self.amount!r}")
        if not isinstance(self.category, str) or not self.category.strip():
            raise ValueError("La categoría no puede estar vacía.")
