# table_agent/model_interpreter.py
"""
Model-backed command interpreter.

Sends the table context and the raw command to a completion client, expects one
JSON object back ({"action", "parameters", "message"}) and decodes it into an
intent from the closed action vocabulary.
"""
import json
import logging
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError

from table_agent.actions import INTENT_TYPES, AddColumn, NoOp, default_header
from table_agent.errors import MalformedResponse, UnknownAction
from table_agent.llm_client import CompletionClient
from table_agent.models import TableSnapshot
from table_agent.provider import classify_provider_error
from table_agent.rules import Interpretation

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an AI assistant that helps users manipulate a data table. You can:

1. ADD ROWS: Add new rows with specified values
2. EDIT CELLS: Change specific cell values
3. DELETE ROWS: Remove rows from the table
4. ADD COLUMNS: Add new columns to the table
5. FILL COLUMNS: Fill entire columns with a value

All cell values are whole numbers.

IMPORTANT RESPONSE FORMAT:
You must respond with a JSON object containing:
- "action": the type of action ("add_row", "edit_cell", "delete_row", "add_column", "fill_column", or "none")
- "parameters": object with the specific parameters for the action
- "message": a human-readable response to the user

ACTION FORMATS:
- add_row: {"action": "add_row", "parameters": {"values": [1, 2, 3]}, "message": "Added new row"}
- edit_cell: {"action": "edit_cell", "parameters": {"row": 0, "col": 1, "value": 42}, "message": "Updated cell"}
- delete_row: {"action": "delete_row", "parameters": {"row": 1}, "message": "Deleted row 2"}
- add_column: {"action": "add_column", "parameters": {"header": "New Column"}, "message": "Added column"}
- fill_column: {"action": "fill_column", "parameters": {"col": 0, "value": 10}, "message": "Filled column"}
- none: {"action": "none", "parameters": {}, "message": "Your response here"}

Use 0-based indexing for rows and columns in parameters, but refer to them as 1-based in messages.
Always respond with valid JSON only."""

DEFAULT_MESSAGE = "Action completed successfully"


class ModelReply(BaseModel):
    action: str
    parameters: Dict[str, Any] = Field(default_factory=dict)
    message: str = ""


def table_context(snapshot: TableSnapshot) -> str:
    info = (
        f"Current table has {snapshot.column_count} columns ({', '.join(snapshot.headers)}) "
        f"and {snapshot.row_count} rows."
    )
    lines = [
        f"Row {idx + 1}: {', '.join(str(cell.value) for cell in row)}"
        for idx, row in enumerate(snapshot.rows)
    ]
    return f"{info}\n\nTable data:\n" + "\n".join(lines)


def build_user_prompt(command: str, snapshot: TableSnapshot) -> str:
    return f'{table_context(snapshot)}\n\nUser command: "{command}"'


def parse_reply(raw: str) -> ModelReply:
    """Strict JSON decode of the reply body into its three top-level fields."""
    text = (raw or "").strip()
    if not text:
        raise MalformedResponse("empty reply")
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError and oversized integer literals
        logger.warning("Model reply is not JSON: %r", text[:500])
        raise MalformedResponse(f"reply is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedResponse(f"expected a JSON object, got {type(payload).__name__}")
    try:
        return ModelReply.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponse(f"reply does not match the schema: {exc}") from exc


def decode_intent(reply: ModelReply, snapshot: TableSnapshot):
    """
    Build the intent named by `reply.action` from its parameters.
    Raises UnknownAction for names outside the vocabulary and MalformedResponse
    when the parameters do not fit the action's shape.
    """
    intent_type = INTENT_TYPES.get(reply.action.strip().lower())
    if intent_type is None:
        raise UnknownAction(reply.action, reply.message)
    parameters = dict(reply.parameters)
    parameters.pop("kind", None)
    if intent_type is NoOp:
        return NoOp()
    try:
        intent = intent_type.model_validate(parameters)
    except ValidationError as exc:
        raise MalformedResponse(f"bad parameters for {reply.action!r}: {exc}") from exc
    if isinstance(intent, AddColumn) and not intent.header:
        intent = AddColumn(header=default_header(snapshot))
    return intent


class ModelInterpreter:
    def __init__(self, client: CompletionClient):
        self.client = client

    async def interpret(self, command: str, snapshot: TableSnapshot) -> Interpretation:
        """
        Ask the model for one action. Transport errors come back as a classified
        ProviderFailure; unparseable replies as MalformedResponse.
        """
        try:
            raw = await self.client.complete(SYSTEM_PROMPT, build_user_prompt(command, snapshot))
        except Exception as exc:
            failure = classify_provider_error(exc)
            logger.exception("Completion request failed (%s)", failure.kind.value)
            raise failure from exc

        reply = parse_reply(raw)
        try:
            intent = decode_intent(reply, snapshot)
        except UnknownAction as exc:
            logger.warning("Model chose unknown action %r; treating as no-op", exc.action)
            return Interpretation(NoOp(), reply.message or DEFAULT_MESSAGE)
        return Interpretation(intent, reply.message or DEFAULT_MESSAGE)
