# table_agent/views.py
import operator
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel

from table_agent.errors import IndexOutOfRange
from table_agent.models import TableCell, TableSnapshot

_OPERATORS = {
    "gt": operator.gt,
    "lt": operator.lt,
    "eq": operator.eq,
    "gte": operator.ge,
    "lte": operator.le,
}


class FilterCriteria(BaseModel):
    column: int
    operator: Literal["gt", "lt", "eq", "gte", "lte"]
    value: int


class SortConfig(BaseModel):
    column: int
    direction: Literal["asc", "desc"] = "asc"


def table_view(
    snapshot: TableSnapshot,
    filter_by: Optional[FilterCriteria] = None,
    sort_by: Optional[SortConfig] = None,
) -> List[Tuple[TableCell, ...]]:
    """
    Filtered and sorted copy of the snapshot's rows for display.
    Cells are shared with the snapshot and keep their canonical row/col.
    """
    rows = list(snapshot.rows)

    if filter_by is not None:
        _check_column(snapshot, filter_by.column)
        compare = _OPERATORS[filter_by.operator]
        rows = [row for row in rows if compare(row[filter_by.column].value, filter_by.value)]

    if sort_by is not None:
        _check_column(snapshot, sort_by.column)
        rows.sort(key=lambda row: row[sort_by.column].value, reverse=sort_by.direction == "desc")

    return rows


def _check_column(snapshot: TableSnapshot, column: int) -> None:
    if not 0 <= column < snapshot.column_count:
        raise IndexOutOfRange(f"Invalid column index. Use column 1-{snapshot.column_count}.")
