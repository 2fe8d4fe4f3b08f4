# table_agent/models.py
import uuid
from typing import Sequence, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


def new_cell_id() -> str:
    """Opaque cell id; 128 random bits make collisions negligible within a session."""
    return uuid.uuid4().hex


class TableCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    value: int
    row: int
    col: int


class TableSnapshot(BaseModel):
    """
    One immutable version of the table.
    - headers: column names, one per column
    - rows: rows of cells, each exactly len(headers) long
    Mutations never touch an existing snapshot; the executor builds a new one.
    """
    model_config = ConfigDict(frozen=True)

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[TableCell, ...], ...] = ()

    @model_validator(mode="after")
    def _check_grid(self) -> "TableSnapshot":
        width = len(self.headers)
        for r_idx, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f"row {r_idx} has {len(row)} cells, expected {width}")
            for c_idx, cell in enumerate(row):
                if cell.row != r_idx or cell.col != c_idx:
                    raise ValueError(
                        f"cell {cell.id} claims ({cell.row}, {cell.col}) but sits at ({r_idx}, {c_idx})"
                    )
        return self

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def values(self) -> list[list[int]]:
        return [[cell.value for cell in row] for row in self.rows]

    @classmethod
    def from_values(cls, headers: Sequence[str], values: Sequence[Sequence[int]]) -> "TableSnapshot":
        rows = tuple(
            tuple(TableCell(id=new_cell_id(), value=v, row=r, col=c) for c, v in enumerate(row))
            for r, row in enumerate(values)
        )
        return cls(headers=tuple(headers), rows=rows)


SEED_HEADERS = ("Column A", "Column B", "Column C")
SEED_VALUES = (
    (42, 73, 18),
    (91, 35, 67),
    (24, 89, 56),
)


def seed_snapshot() -> TableSnapshot:
    return TableSnapshot.from_values(SEED_HEADERS, SEED_VALUES)
