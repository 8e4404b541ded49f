"""Shared pytest fixtures for the expense tracker tests."""

import datetime

import pytest

from controller import ExpenseTrackerController
from expense_tracker_model import ExpenseTrackerModel
from transaction import Transaction


class RecordingListener:
    """Listener that remembers every model it was updated with."""

    def __init__(self):
        self.updates = []

    def update(self, model):
        self.updates.append(model)


class FailingListener:
    def update(self, model):
        raise RuntimeError("listener exploded")


@pytest.fixture
def model():
    return ExpenseTrackerModel()


@pytest.fixture
def controller(model):
    return ExpenseTrackerController(model)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def failing_listener():
    return FailingListener()


@pytest.fixture
def sample_transactions():
    day = datetime.date(2024, 3, 15)
    return [
        Transaction(amount=50.0, category="food", store_name="SUPERMERCADO DIA", date=day),
        Transaction(amount=120.0, category="travel", store_name="AEROLINEAS", date=day),
        Transaction(amount=50.0, category="bills", store_name="EDESUR", date=day),
    ]


@pytest.fixture
def populated_model(model, sample_transactions):
    for t in sample_transactions:
        model.add_transaction(t)
    return model
