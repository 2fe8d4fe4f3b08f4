# table_agent/agent.py
import logging
import random
from typing import NamedTuple, Optional

from table_agent import rules
from table_agent.actions import NoOp, apply_intent
from table_agent.config import Settings
from table_agent.errors import ExecutionFailure, ProviderFailure
from table_agent.llm_client import CompletionClient, GroqCompletionClient
from table_agent.model_interpreter import ModelInterpreter
from table_agent.models import TableSnapshot
from table_agent.provider import (
    BILLING_URL,
    ProviderStatus,
    has_credentials,
    next_status,
)

logger = logging.getLogger(__name__)

QUOTA_NOTICE = " (Groq API quota exceeded - using fallback mode)"
UNAVAILABLE_NOTICE = " (AI assistant temporarily unavailable - using fallback mode)"


class DispatchResult(NamedTuple):
    snapshot: Optional[TableSnapshot]
    message: str


class TableAgent:
    """
    Turns a command string and the current snapshot into (new snapshot | None, message).

    The model path is used while the provider is CONFIGURED; the rule-based path
    handles everything else and backs up every model failure. The provider status
    is decided once here and only ever moves CONFIGURED -> QUOTA_EXCEEDED.
    """

    def __init__(self, client: Optional[CompletionClient] = None, rng: Optional[random.Random] = None):
        self._model = ModelInterpreter(client) if client is not None else None
        self._status = ProviderStatus.CONFIGURED if client is not None else ProviderStatus.NOT_CONFIGURED
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Settings, rng: Optional[random.Random] = None) -> "TableAgent":
        client = GroqCompletionClient.from_settings(settings) if has_credentials(settings.groq_api_key) else None
        agent = cls(client=client, rng=rng)
        logger.info("Table agent starting with provider status %s", agent.get_provider_status().value)
        return agent

    def get_provider_status(self) -> ProviderStatus:
        return self._status

    async def dispatch(self, command: str, snapshot: TableSnapshot) -> DispatchResult:
        if self._status is not ProviderStatus.CONFIGURED or self._model is None:
            result = self._run_rules(command, snapshot)
            if self._status is ProviderStatus.QUOTA_EXCEEDED and "quota" not in result.message.lower():
                result = DispatchResult(result.snapshot, result.message + QUOTA_NOTICE)
            return result

        try:
            interpretation = await self._model.interpret(command, snapshot)
        except ProviderFailure as failure:
            self._status = next_status(self._status, failure)
            fallback = self._run_rules(command, snapshot)
            if failure.is_quota:
                logger.warning("Provider quota exhausted; switching to rule-based commands")
                return DispatchResult(
                    fallback.snapshot,
                    f"⚠️ Groq API quota exceeded. Please check your billing at {BILLING_URL}\n\n"
                    f"{fallback.message} (using fallback mode)",
                )
            logger.info("Model path failed (%s); using rule-based fallback", failure.kind.value)
            return DispatchResult(fallback.snapshot, fallback.message + UNAVAILABLE_NOTICE)

        try:
            return self._apply(interpretation.intent, interpretation.message, snapshot)
        except ExecutionFailure as exc:
            logger.info("Model intent %s rejected: %s", interpretation.intent.kind, exc)
            return DispatchResult(None, f"{interpretation.message}\n\nNothing was changed: {exc}")

    def _run_rules(self, command: str, snapshot: TableSnapshot) -> DispatchResult:
        interpretation = rules.interpret(command, snapshot, self._status)
        try:
            return self._apply(interpretation.intent, interpretation.message, snapshot)
        except ExecutionFailure as exc:
            return DispatchResult(None, str(exc))

    def _apply(self, intent, message: str, snapshot: TableSnapshot) -> DispatchResult:
        if isinstance(intent, NoOp):
            return DispatchResult(None, message)
        return DispatchResult(apply_intent(intent, snapshot, self._rng), message)
