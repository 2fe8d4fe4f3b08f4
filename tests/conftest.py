import random
from typing import List, Union

import pytest

from table_agent.agent import TableAgent
from table_agent.models import TableSnapshot, seed_snapshot


class FakeCompletionClient:
    """Returns queued replies in order; an exception in the queue is raised instead."""

    def __init__(self, *replies: Union[str, BaseException]):
        self.replies: List[Union[str, BaseException]] = list(replies)
        self.calls: List[tuple] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


class FakeStatusError(Exception):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


@pytest.fixture
def snapshot() -> TableSnapshot:
    return seed_snapshot()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def offline_agent(rng) -> TableAgent:
    return TableAgent(client=None, rng=rng)
