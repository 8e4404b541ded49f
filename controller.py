# controller.py

import datetime
import logging
from typing import List, Optional

from expense_tracker_model import ExpenseTrackerModel, ListenerNotificationError
from transaction import Transaction
from transaction_filter import TransactionFilter

logger = logging.getLogger(__name__)


class ExpenseTrackerController:
    """Turns user actions into model updates.

    Bad user input is reported through the return value and the log rather
    than by raising, so the view can show a message and carry on.
    """

    def __init__(self, model: ExpenseTrackerModel) -> None:
        self.model = model

    def add_transaction(self, amount: float, category: str, store_name: str = "",
                        date: Optional[datetime.date] = None) -> bool:
        try:
            if date is None:
                t = Transaction(amount=amount, category=category, store_name=store_name)
            else:
                t = Transaction(amount=amount, category=category, store_name=store_name, date=date)
        except (TypeError, ValueError) as e:
            logger.warning("Rejected transaction (%r, %r): %s", amount, category, e)
            return False
        self.model.add_transaction(t)
        return True

    def remove_transaction(self, index: int) -> bool:
        transactions = self.model.get_transactions()
        if not 0 <= index < len(transactions):
            logger.warning("No transaction at position %d", index)
            return False
        self.model.remove_transaction(transactions[index])
        return True

    def apply_filter(self, transaction_filter: TransactionFilter) -> List[int]:
        indices = transaction_filter.filter(self.model.get_transactions())
        logger.info("Filter %s matched %d transaction(s)", type(transaction_filter).__name__, len(indices))
        self.model.set_matched_filter_indices(indices)
        return indices

    def clear_filter(self) -> None:
        self.model.set_matched_filter_indices([])

    def import_statement(self, pdf_path: str, parser=None) -> int:
        """Add every transaction parsed from a PDF statement.

        A failing listener does not stop the import: all records are added
        first, then the listener failures of the whole import are raised
        together as one ListenerNotificationError.
        """
        if parser is None:
            from pdf_parser import PDFParser
            parser = PDFParser()
        txs = parser.parse_pdf(pdf_path)
        failures = []
        for t in txs:
            try:
                self.model.add_transaction(t)
            except ListenerNotificationError as e:
                failures.extend(e.failures)
        if failures:
            logger.warning("Imported %d transaction(s) from %s with listener errors", len(txs), pdf_path)
            raise ListenerNotificationError(failures)
        return len(txs)
