# summary.py

import pandas as pd

from expense_tracker_model import ExpenseTrackerModel

COLUMNS = ["date", "store_name", "category", "amount", "matched"]


def to_dataframe(model: ExpenseTrackerModel) -> pd.DataFrame:
    matched = set(model.get_matched_filter_indices())
    rows = [
        (t.date, t.store_name, t.category, t.amount, i in matched)
        for i, t in enumerate(model.get_transactions())
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def category_totals(model: ExpenseTrackerModel) -> pd.Series:
    df = to_dataframe(model)
    if df.empty:
        return pd.Series(dtype=float, name="amount")
    return df.groupby("category")["amount"].sum().sort_values(ascending=False)


def export_to_excel(model: ExpenseTrackerModel, path: str) -> None:
    df = to_dataframe(model).rename(columns={
        "date": "Fecha", "store_name": "Comercio", "category": "Categoría",
        "amount": "Monto", "matched": "Filtrado",
    })
    df.to_excel(path, index=False, sheet_name='Gastos')
