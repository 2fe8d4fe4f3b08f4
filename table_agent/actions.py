# table_agent/actions.py
import random
from typing import Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from table_agent.errors import ArityMismatch, IndexOutOfRange
from table_agent.models import TableCell, TableSnapshot, new_cell_id

RANDOM_FILL_MIN = 1
RANDOM_FILL_MAX = 100


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AddRow(_Intent):
    kind: Literal["add_row"] = "add_row"
    values: List[int]


class EditCell(_Intent):
    kind: Literal["edit_cell"] = "edit_cell"
    row: int
    col: int
    value: int


class DeleteRow(_Intent):
    kind: Literal["delete_row"] = "delete_row"
    row: int


class AddColumn(_Intent):
    kind: Literal["add_column"] = "add_column"
    header: Optional[str] = None


class FillColumn(_Intent):
    kind: Literal["fill_column"] = "fill_column"
    col: int
    value: int


class NoOp(_Intent):
    kind: Literal["none"] = "none"


ActionIntent = Union[AddRow, EditCell, DeleteRow, AddColumn, FillColumn, NoOp]

# action name in a model reply -> intent type
INTENT_TYPES: Dict[str, type] = {
    "add_row": AddRow,
    "edit_cell": EditCell,
    "delete_row": DeleteRow,
    "add_column": AddColumn,
    "fill_column": FillColumn,
    "none": NoOp,
}


def default_header(snapshot: TableSnapshot) -> str:
    return f"Column {snapshot.column_count + 1}"


def _check_row(snapshot: TableSnapshot, row: int) -> None:
    if not 0 <= row < snapshot.row_count:
        raise IndexOutOfRange(f"Invalid row index. Use row 1-{snapshot.row_count}.")


def _check_col(snapshot: TableSnapshot, col: int) -> None:
    if not 0 <= col < snapshot.column_count:
        raise IndexOutOfRange(f"Invalid column index. Use column 1-{snapshot.column_count}.")


def _add_row(intent: AddRow, snapshot: TableSnapshot, rng: random.Random) -> TableSnapshot:
    if len(intent.values) != snapshot.column_count:
        raise ArityMismatch(f"Please provide exactly {snapshot.column_count} values for the new row.")
    r = snapshot.row_count
    new_row = tuple(
        TableCell(id=new_cell_id(), value=value, row=r, col=c) for c, value in enumerate(intent.values)
    )
    return snapshot.model_copy(update={"rows": snapshot.rows + (new_row,)})


def _edit_cell(intent: EditCell, snapshot: TableSnapshot, rng: random.Random) -> TableSnapshot:
    if not (0 <= intent.row < snapshot.row_count and 0 <= intent.col < snapshot.column_count):
        raise IndexOutOfRange(
            f"Invalid row or column index. Use row 1-{snapshot.row_count}, column 1-{snapshot.column_count}."
        )
    rows = list(snapshot.rows)
    target = rows[intent.row]
    rows[intent.row] = tuple(
        cell.model_copy(update={"value": intent.value}) if cell.col == intent.col else cell
        for cell in target
    )
    return snapshot.model_copy(update={"rows": tuple(rows)})


def _delete_row(intent: DeleteRow, snapshot: TableSnapshot, rng: random.Random) -> TableSnapshot:
    _check_row(snapshot, intent.row)
    survivors = [row for r_idx, row in enumerate(snapshot.rows) if r_idx != intent.row]
    # rows below the deleted one move up; their cells keep ids but take the new position
    rows = tuple(
        tuple(cell if cell.row == r_idx else cell.model_copy(update={"row": r_idx}) for cell in row)
        for r_idx, row in enumerate(survivors)
    )
    return snapshot.model_copy(update={"rows": rows})


def _add_column(intent: AddColumn, snapshot: TableSnapshot, rng: random.Random) -> TableSnapshot:
    header = intent.header or default_header(snapshot)
    c = snapshot.column_count
    rows = tuple(
        row + (TableCell(id=new_cell_id(), value=rng.randint(RANDOM_FILL_MIN, RANDOM_FILL_MAX), row=r, col=c),)
        for r, row in enumerate(snapshot.rows)
    )
    return snapshot.model_copy(update={"headers": snapshot.headers + (header,), "rows": rows})


def _fill_column(intent: FillColumn, snapshot: TableSnapshot, rng: random.Random) -> TableSnapshot:
    _check_col(snapshot, intent.col)
    rows = tuple(
        tuple(cell.model_copy(update={"value": intent.value}) if cell.col == intent.col else cell for cell in row)
        for row in snapshot.rows
    )
    return snapshot.model_copy(update={"rows": rows})


def _no_op(intent: NoOp, snapshot: TableSnapshot, rng: random.Random) -> TableSnapshot:
    return snapshot


_EXECUTORS: Dict[type, Callable[..., TableSnapshot]] = {
    AddRow: _add_row,
    EditCell: _edit_cell,
    DeleteRow: _delete_row,
    AddColumn: _add_column,
    FillColumn: _fill_column,
    NoOp: _no_op,
}


def apply_intent(
    intent: ActionIntent, snapshot: TableSnapshot, rng: Optional[random.Random] = None
) -> TableSnapshot:
    """
    Apply one intent and return the resulting snapshot.
    Raises ArityMismatch / IndexOutOfRange without touching `snapshot` when the
    intent does not fit it. `rng` supplies the values of newly added columns.
    """
    executor = _EXECUTORS[type(intent)]
    return executor(intent, snapshot, rng or random.Random())
