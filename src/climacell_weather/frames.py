"""Flatten decoded weather records into pandas DataFrames."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd
from pydantic import BaseModel

from .models import DateValue, MinMaxSeries
from .values import OptionalValue


def _flatten_series(name: str, series: MinMaxSeries, row: Dict[str, Any]) -> None:
    for side, extreme in (("min", series.min()), ("max", series.max())):
        if not extreme.found:
            continue
        row[f"{name}_{side}"] = extreme.value.value
        row[f"{name}_{side}_time"] = extreme.observation_time
        units, ok = extreme.get_units()
        if ok and units:
            row[f"{name}_units"] = units


def _flatten_fields(model: BaseModel, row: Dict[str, Any]) -> None:
    """Copy the fields of ``model`` into ``row``, descending into field groups.

    Absent wrappers are skipped; null wrappers become None.
    """
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, OptionalValue):
            if value.is_absent:
                continue
            row[name] = value.value
            if value.units:
                row[f"{name}_units"] = value.units
        elif isinstance(value, DateValue):
            row[name] = value.value
        elif isinstance(value, MinMaxSeries):
            _flatten_series(name, value, row)
        elif isinstance(value, BaseModel):
            _flatten_fields(value, row)
        else:
            row[name] = value


def record_to_row(record: BaseModel) -> Dict[str, Any]:
    """Flatten one response record into a column -> value mapping."""
    row: Dict[str, Any] = {}
    _flatten_fields(record, row)
    return row


def records_to_dataframe(records: Iterable[BaseModel]) -> pd.DataFrame:
    """Build a DataFrame with one row per record, ordered by observation time.

    Columns are the union of fields present in any record; a
    ``<field>_units`` column follows each field that reported units.
    """
    rows: List[Dict[str, Any]] = [record_to_row(record) for record in records]
    dataframe = pd.DataFrame(rows)
    if dataframe.empty:
        return dataframe
    if "observation_time" in dataframe.columns:
        dataframe = dataframe.sort_values("observation_time", kind="stable").reset_index(drop=True)
    return dataframe


__all__ = ["record_to_row", "records_to_dataframe"]
