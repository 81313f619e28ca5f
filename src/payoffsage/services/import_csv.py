"""CSV ingestion of debt lists."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from .debts import Debt


@dataclass(slots=True)
class DebtColumnMapping:
    """Maps debt fields to (lower-cased) CSV headers."""

    name: str = "name"
    balance: str = "balance"
    apr: str = "apr"
    minimum_payment: str = "minimum_payment"
    id: str | None = "id"


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with consistent column casing."""

    frame = pd.read_csv(file_path, encoding=encoding)
    frame.columns = [str(c).strip().lower() for c in frame.columns]
    return frame


def _parse_amount(row: Mapping, column: str, line: int) -> float:
    raw = row.get(column)
    if raw is None or (isinstance(raw, float) and pd.isna(raw)) or str(raw).strip() == "":
        raise ValueError(f"Row {line}: missing value for {column!r}.")
    try:
        return float(str(raw).replace(",", "").strip())
    except ValueError as exc:
        raise ValueError(f"Row {line}: {column!r} is not a number ({raw!r}).") from exc


def debts_from_rows(*, rows: Iterable[Mapping], mapping: DebtColumnMapping) -> list[Debt]:
    """Convert dict-like rows into ``Debt`` values.

    Rows without an id column are numbered from 1 in file order. A missing or
    non-numeric amount raises ``ValueError`` naming the row.
    """

    debts: list[Debt] = []
    for index, row in enumerate(rows, start=1):
        name = row.get(mapping.name)
        if name is None or (isinstance(name, float) and pd.isna(name)) or not str(name).strip():
            raise ValueError(f"Row {index}: missing value for {mapping.name!r}.")

        debt_id: int | str = index
        if mapping.id:
            candidate = row.get(mapping.id)
            if candidate is not None and not (isinstance(candidate, float) and pd.isna(candidate)):
                try:
                    debt_id = int(candidate)
                except (TypeError, ValueError):
                    debt_id = str(candidate).strip()

        debts.append(
            Debt(
                id=debt_id,
                name=str(name).strip(),
                balance=_parse_amount(row, mapping.balance, index),
                apr=_parse_amount(row, mapping.apr, index),
                minimum_payment=_parse_amount(row, mapping.minimum_payment, index),
            )
        )
    return debts


def load_debts_csv(*, csv_path: Path, mapping: DebtColumnMapping | None = None) -> list[Debt]:
    """Parse a CSV of debts into ``Debt`` values."""

    mapping = mapping or DebtColumnMapping()
    frame = normalize_frame(file_path=csv_path)

    missing = [
        column
        for column in (mapping.name, mapping.balance, mapping.apr, mapping.minimum_payment)
        if column not in frame.columns
    ]
    if missing:
        raise ValueError(f"CSV is missing required columns: {', '.join(missing)}")

    rows = frame.to_dict(orient="records")
    return debts_from_rows(rows=rows, mapping=mapping)


__all__ = ["DebtColumnMapping", "debts_from_rows", "load_debts_csv", "normalize_frame"]
