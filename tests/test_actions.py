"""Tests for the action executor."""

import random

import pytest

from table_agent.actions import (
    AddColumn,
    AddRow,
    DeleteRow,
    EditCell,
    FillColumn,
    NoOp,
    apply_intent,
)
from table_agent.errors import ArityMismatch, IndexOutOfRange


def cells_by_id(snap):
    return {cell.id: cell for row in snap.rows for cell in row}


class TestAddRow:
    def test_appends_row_with_values(self, snapshot) -> None:
        result = apply_intent(AddRow(values=[10, 20, 30]), snapshot)
        assert result.row_count == snapshot.row_count + 1
        assert result.values()[-1] == [10, 20, 30]
        assert [(c.row, c.col) for c in result.rows[-1]] == [(3, 0), (3, 1), (3, 2)]

    def test_new_cells_get_fresh_ids(self, snapshot) -> None:
        result = apply_intent(AddRow(values=[1, 2, 3]), snapshot)
        old_ids = set(cells_by_id(snapshot))
        assert not old_ids & {cell.id for cell in result.rows[-1]}

    def test_wrong_arity(self, snapshot) -> None:
        with pytest.raises(ArityMismatch, match="exactly 3 values"):
            apply_intent(AddRow(values=[1, 2]), snapshot)
        assert snapshot.row_count == 3


class TestEditCell:
    def test_only_target_cell_changes(self, snapshot) -> None:
        result = apply_intent(EditCell(row=0, col=1, value=50), snapshot)
        before, after = cells_by_id(snapshot), cells_by_id(result)
        assert before.keys() == after.keys()
        changed = [cid for cid in before if before[cid] != after[cid]]
        assert len(changed) == 1
        cell = after[changed[0]]
        assert (cell.row, cell.col, cell.value) == (0, 1, 50)

    @pytest.mark.parametrize("row,col", [(3, 0), (0, 3), (-1, 0)])
    def test_out_of_range(self, snapshot, row, col) -> None:
        with pytest.raises(IndexOutOfRange, match="row 1-3, column 1-3"):
            apply_intent(EditCell(row=row, col=col, value=1), snapshot)


class TestDeleteRow:
    def test_removes_row_and_renumbers(self, snapshot) -> None:
        result = apply_intent(DeleteRow(row=0), snapshot)
        assert result.values() == [[91, 35, 67], [24, 89, 56]]
        for r, row in enumerate(result.rows):
            assert all(cell.row == r for cell in row)
        # ids survive the move
        assert [c.id for c in result.rows[0]] == [c.id for c in snapshot.rows[1]]

    def test_out_of_range(self, snapshot) -> None:
        with pytest.raises(IndexOutOfRange, match="1-3"):
            apply_intent(DeleteRow(row=4), snapshot)

    def test_original_untouched(self, snapshot) -> None:
        apply_intent(DeleteRow(row=1), snapshot)
        assert snapshot.row_count == 3


class TestAddColumn:
    def test_adds_header_and_random_cells(self, snapshot) -> None:
        result = apply_intent(AddColumn(header="Price"), snapshot, random.Random(7))
        assert result.headers[-1] == "Price"
        for r, row in enumerate(result.rows):
            assert len(row) == 4
            assert (row[-1].row, row[-1].col) == (r, 3)
            assert 1 <= row[-1].value <= 100

    def test_default_header(self, snapshot) -> None:
        result = apply_intent(AddColumn(), snapshot)
        assert result.headers[-1] == "Column 4"

    def test_seeded_rng_is_reproducible(self, snapshot) -> None:
        first = apply_intent(AddColumn(header="X"), snapshot, random.Random(99))
        second = apply_intent(AddColumn(header="X"), snapshot, random.Random(99))
        assert [row[-1].value for row in first.rows] == [row[-1].value for row in second.rows]

    def test_duplicate_header_allowed(self, snapshot) -> None:
        result = apply_intent(AddColumn(header="Column A"), snapshot)
        assert result.headers.count("Column A") == 2


class TestFillColumn:
    def test_fills_every_row(self, snapshot) -> None:
        result = apply_intent(FillColumn(col=2, value=0), snapshot)
        assert [row[2] for row in result.values()] == [0, 0, 0]
        assert [row[:2] for row in result.values()] == [row[:2] for row in snapshot.values()]

    def test_out_of_range(self, snapshot) -> None:
        with pytest.raises(IndexOutOfRange, match="column 1-3"):
            apply_intent(FillColumn(col=5, value=1), snapshot)


class TestNoOp:
    def test_returns_same_snapshot(self, snapshot) -> None:
        assert apply_intent(NoOp(), snapshot) == snapshot
