# expense_tracker_model.py
"""
Observable model of the expense tracker.

The model keeps the transactions entered so far and the indices of the ones
matched by the last filter. Registered listeners are told whenever either of
them changes; they then read whatever they need back from the model.
"""

import logging
import numbers
from typing import Any, List, Optional, Protocol, Sequence, Tuple

from transaction import Transaction

logger = logging.getLogger(__name__)


class InvalidArgumentError(ValueError):
    """Raised when the model rejects an input before touching its state."""


class ListenerNotificationError(RuntimeError):
    """Raised after a notification round in which some listeners failed."""

    def __init__(self, failures: List[Tuple[Any, BaseException]]) -> None:
        self.failures = failures
        super().__init__(
            f"{len(failures)} listener(s) failed during notification: "
            + "; ".join(f"{type(exc).__name__}: {exc}" for _, exc in failures)
        )


class ExpenseTrackerModelListener(Protocol):
    def update(self, model: "ExpenseTrackerModel") -> None:
        ...


class ExpenseTrackerModel:
    def __init__(self) -> None:
        self._transactions: List[Transaction] = []
        self._matched_filter_indices: List[int] = []
        self._listeners: List[ExpenseTrackerModelListener] = []

    # Transaction operations
    def add_transaction(self, t: Optional[Transaction]) -> None:
        if t is None:
            raise InvalidArgumentError("The new transaction must be non-null.")
        self._transactions.append(t)
        logger.debug("Transaction added: %r", t)
        # the previous filter result no longer lines up with the list
        self._matched_filter_indices.clear()
        self.state_changed()

    def remove_transaction(self, t: Optional[Transaction]) -> None:
        """Remove the first occurrence of ``t``.

        Unknown or ``None`` transactions leave the list alone, but the filter
        result is still cleared and listeners are still notified.
        """
        try:
            self._transactions.remove(t)
            logger.debug("Transaction removed: %r", t)
        except ValueError:
            logger.debug("Transaction not present, nothing removed: %r", t)
        self._matched_filter_indices.clear()
        self.state_changed()

    def get_transactions(self) -> List[Transaction]:
        return list(self._transactions)

    # Filter operations
    def set_matched_filter_indices(self, indices: Optional[Sequence[int]]) -> None:
        if indices is None:
            raise InvalidArgumentError("The matched filter indices list must be non-null.")
        new_indices = []
        size = len(self._transactions)
        for index in indices:
            if not isinstance(index, numbers.Integral) or isinstance(index, bool):
                raise InvalidArgumentError(f"Matched filter index must be an integer: {index!r}")
            if index < 0 or index > size - 1:
                raise InvalidArgumentError(
                    "Each matched filter index must be between 0 (inclusive) "
                    f"and the number of transactions ({size}, exclusive): {index}"
                )
            new_indices.append(int(index))
        self._matched_filter_indices = new_indices
        logger.debug("Matched filter indices set: %s", new_indices)
        self.state_changed()

    def get_matched_filter_indices(self) -> List[int]:
        return list(self._matched_filter_indices)

    # Listener operations
    def register(self, listener: Optional[ExpenseTrackerModelListener]) -> bool:
        if listener is None or self.contains_listener(listener):
            return False
        self._listeners.append(listener)
        return True

    def unregister(self, listener: Optional[ExpenseTrackerModelListener]) -> bool:
        if listener is None or not self.contains_listener(listener):
            return False
        self._listeners = [l for l in self._listeners if l is not listener]
        return True

    def number_of_listeners(self) -> int:
        return len(self._listeners)

    def contains_listener(self, listener: Optional[ExpenseTrackerModelListener]) -> bool:
        if listener is None:
            return False
        return any(l is listener for l in self._listeners)

    def state_changed(self) -> None:
        """Notify every registered listener, in registration order.

        A failing listener does not stop the others from being notified. The
        failures are logged and reported together once the round is over.
        """
        failures: List[Tuple[Any, BaseException]] = []
        # snapshot: listeners may (un)register while being notified
        for listener in list(self._listeners):
            try:
                listener.update(self)
            except Exception as e:
                logger.exception("Listener %r failed to update", listener)
                failures.append((listener, e))
        if failures:
            raise ListenerNotificationError(failures)
