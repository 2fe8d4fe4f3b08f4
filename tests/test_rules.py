"""Tests for the rule-based command interpreter."""

import pytest

from table_agent.actions import AddColumn, AddRow, DeleteRow, EditCell, FillColumn, NoOp
from table_agent.provider import ProviderStatus
from table_agent.rules import interpret, parse_values

OFFLINE = ProviderStatus.NOT_CONFIGURED


class TestParseValues:
    def test_commas_and_spaces(self) -> None:
        assert parse_values(" 10, 20 30,-4") == [10, 20, 30, -4]

    def test_non_numeric_tokens_dropped(self) -> None:
        assert parse_values("10, abc, 30") == [10, 30]


class TestInterpret:
    def test_add_row(self, snapshot) -> None:
        result = interpret("add row 10, 20, 30", snapshot, OFFLINE)
        assert result.intent == AddRow(values=[10, 20, 30])
        assert "10, 20, 30" in result.message

    def test_case_and_whitespace_insensitive(self, snapshot) -> None:
        result = interpret("  ADD   Row 1 2   3 ", snapshot, OFFLINE)
        assert result.intent == AddRow(values=[1, 2, 3])

    @pytest.mark.parametrize(
        "command",
        ["set row 1 col 2 to 50", "change row 1 column 2 to 50", "Please SET ROW 1 COL 2 TO 50"],
    )
    def test_edit_cell_is_one_based(self, snapshot, command) -> None:
        result = interpret(command, snapshot, OFFLINE)
        assert result.intent == EditCell(row=0, col=1, value=50)

    def test_delete_row(self, snapshot) -> None:
        result = interpret("delete row 2", snapshot, OFFLINE)
        assert result.intent == DeleteRow(row=1)
        assert result.message == "Deleted row 2"

    def test_fill_column(self, snapshot) -> None:
        result = interpret("fill column 3 with 7", snapshot, OFFLINE)
        assert result.intent == FillColumn(col=2, value=7)

    def test_add_column_keeps_name_case(self, snapshot) -> None:
        result = interpret("add column Unit Price", snapshot, OFFLINE)
        assert result.intent == AddColumn(header="Unit Price")

    def test_add_column_default_name(self, snapshot) -> None:
        result = interpret("add column", snapshot, OFFLINE)
        assert result.intent == AddColumn(header="Column 4")

    @pytest.mark.parametrize("command", ["help", "commands", "can you help me?"])
    def test_help(self, snapshot, command) -> None:
        result = interpret(command, snapshot, OFFLINE)
        assert result.intent == NoOp()
        assert "Available commands" in result.message
        assert "not configured" in result.message

    def test_help_reflects_quota_state(self, snapshot) -> None:
        result = interpret("help", snapshot, ProviderStatus.QUOTA_EXCEEDED)
        assert "quota exceeded" in result.message

    def test_unrecognized(self, snapshot) -> None:
        result = interpret("xyz nonsense", snapshot, OFFLINE)
        assert result.intent == NoOp()
        assert "add row 10, 20, 30" in result.message
        assert "Configure GROQ_API_KEY" in result.message

    def test_unrecognized_when_configured_has_no_hint(self, snapshot) -> None:
        result = interpret("xyz nonsense", snapshot, ProviderStatus.CONFIGURED)
        assert result.message.startswith("I didn't understand that command.")
