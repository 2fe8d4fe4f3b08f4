# table_agent/errors.py
from enum import Enum


class TableAgentError(Exception):
    """Base class for everything the engine raises internally."""


class ExecutionFailure(TableAgentError):
    """An intent could not be applied to a snapshot. The message is user-facing."""


class ArityMismatch(ExecutionFailure):
    pass


class IndexOutOfRange(ExecutionFailure):
    pass


class FailureKind(str, Enum):
    QUOTA_EXCEEDED = "quota_exceeded"
    UNAVAILABLE = "unavailable"
    MALFORMED_RESPONSE = "malformed_response"


class ProviderFailure(TableAgentError):
    """The model-backed path could not produce a usable intent."""

    def __init__(self, kind: FailureKind, detail: str = ""):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail

    @property
    def is_quota(self) -> bool:
        return self.kind is FailureKind.QUOTA_EXCEEDED


class MalformedResponse(ProviderFailure):
    def __init__(self, detail: str = ""):
        super().__init__(FailureKind.MALFORMED_RESPONSE, detail)


class UnknownAction(MalformedResponse):
    """The reply named an action outside the closed vocabulary."""

    def __init__(self, action: str, message: str = ""):
        super().__init__(f"unknown action {action!r}")
        self.action = action
        self.message = message
