# table_agent/rules.py
"""
Rule-based command interpreter.

Always available: it is the only path when no model provider is configured and
the fallback whenever the model path fails. Matching is case-insensitive on a
whitespace-normalized command; the first matching template wins.
"""
import re
from typing import List, NamedTuple

from table_agent.actions import (
    ActionIntent,
    AddColumn,
    AddRow,
    DeleteRow,
    EditCell,
    FillColumn,
    NoOp,
    default_header,
)
from table_agent.models import TableSnapshot
from table_agent.provider import ProviderStatus, status_banner, status_hint

_ADD_ROW = re.compile(r"^add row\b(.*)$", re.IGNORECASE)
_SET_CELL = re.compile(r"\b(?:set|change) row (\d+) (?:col|column) (\d+) to (-?\d+)\b", re.IGNORECASE)
_DELETE_ROW = re.compile(r"^delete row (\d+)\b", re.IGNORECASE)
_FILL_COLUMN = re.compile(r"^fill (?:col|column) (\d+) with (-?\d+)\b", re.IGNORECASE)
_ADD_COLUMN = re.compile(r"^add column\b\s*(.*)$", re.IGNORECASE)
_INTEGER = re.compile(r"[-+]?\d+")

EXAMPLES = (
    '• "add row 10, 20, 30"\n'
    '• "set row 1 col 2 to 50"\n'
    '• "delete row 2"'
)

HELP_TEXT = """Available commands:
• add row [values] - Add a new row with specified values
• set row X col Y to Z - Change a specific cell value
• delete row X - Remove a row
• add column [name] - Add a new column
• fill column X with Y - Fill entire column with value
• help - Show this help message

Examples:
{examples}

With Groq configured, you can also use natural language like:
• "Make the first row all zeros"
• "Add a column for prices"
• "Change all values in column 2 to be double their current value\""""


class Interpretation(NamedTuple):
    intent: ActionIntent
    message: str


def normalize(command: str) -> str:
    return " ".join(command.split())


def parse_values(text: str) -> List[int]:
    """Integers from a comma/space separated list; anything non-numeric is dropped."""
    return [int(token) for token in re.split(r"[,\s]+", text) if _INTEGER.fullmatch(token)]


def help_message(status: ProviderStatus) -> str:
    return f"{status_banner(status)}\n\n{HELP_TEXT.format(examples=EXAMPLES)}"


def unrecognized_message(status: ProviderStatus) -> str:
    return (
        f"I didn't understand that command{status_hint(status)}. "
        f'Try "help" to see available commands, or use phrases like:\n{EXAMPLES}'
    )


def interpret(command: str, snapshot: TableSnapshot, status: ProviderStatus) -> Interpretation:
    """
    Translate `command` into an intent plus the message to show if it applies.
    Range and arity checks are left to the executor, whose failure text replaces
    the message when the intent does not fit the snapshot.
    """
    text = normalize(command)

    match = _ADD_ROW.match(text)
    if match:
        values = parse_values(match.group(1))
        return Interpretation(
            AddRow(values=values),
            f"Added new row with values: {', '.join(str(v) for v in values)}",
        )

    match = _SET_CELL.search(text)
    if match:
        row, col, value = (int(g) for g in match.groups())
        return Interpretation(
            EditCell(row=row - 1, col=col - 1, value=value),
            f"Updated row {row}, column {col} to {value}",
        )

    match = _DELETE_ROW.match(text)
    if match:
        row = int(match.group(1))
        return Interpretation(DeleteRow(row=row - 1), f"Deleted row {row}")

    match = _FILL_COLUMN.match(text)
    if match:
        col, value = int(match.group(1)), int(match.group(2))
        return Interpretation(FillColumn(col=col - 1, value=value), f"Filled column {col} with {value}")

    match = _ADD_COLUMN.match(text)
    if match:
        header = match.group(1).strip() or default_header(snapshot)
        return Interpretation(AddColumn(header=header), f'Added new column "{header}" with random values')

    lowered = text.casefold()
    if "help" in lowered or lowered == "commands":
        return Interpretation(NoOp(), help_message(status))

    return Interpretation(NoOp(), unrecognized_message(status))
