# table_agent/routes.py
import asyncio
import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from table_agent.agent import DispatchResult, TableAgent
from table_agent.config import Settings
from table_agent.errors import IndexOutOfRange
from table_agent.models import TableSnapshot, seed_snapshot
from table_agent.renderer import render_table_png
from table_agent.schemas import (
    CommandRequest,
    CommandResponse,
    StatusResponse,
    ViewRequest,
    ViewResponse,
)
from table_agent.views import table_view

logger = logging.getLogger(__name__)

router = APIRouter()


class TableSession:
    """Holds the current snapshot for one running app and serializes dispatches."""

    def __init__(self, agent: TableAgent, snapshot: Optional[TableSnapshot] = None):
        self.agent = agent
        self.snapshot = snapshot or seed_snapshot()
        self._lock = asyncio.Lock()

    async def run_command(self, text: str) -> Tuple[DispatchResult, TableSnapshot]:
        """Dispatch under the lock; returns the result and the table as it stood right after it."""
        async with self._lock:
            result = await self.agent.dispatch(text, self.snapshot)
            if result.snapshot is not None:
                self.snapshot = result.snapshot
            return result, self.snapshot

    def reset(self) -> TableSnapshot:
        self.snapshot = seed_snapshot()
        return self.snapshot


_session: Optional[TableSession] = None


def get_session() -> TableSession:
    global _session
    if _session is None:
        _session = TableSession(TableAgent.from_settings(Settings.from_env()))
    return _session


# ------------------------------
# Table
# ------------------------------
@router.get("/table", response_model=TableSnapshot)
def get_table(session: TableSession = Depends(get_session)):
    return session.snapshot


@router.post("/table/reset", response_model=TableSnapshot)
def reset_table(session: TableSession = Depends(get_session)):
    return session.reset()


@router.post("/table/view", response_model=ViewResponse)
def view_table(req: ViewRequest, session: TableSession = Depends(get_session)):
    snapshot = session.snapshot
    try:
        rows = table_view(snapshot, req.filter, req.sort)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ViewResponse(
        headers=list(snapshot.headers),
        rows=[[cell.value for cell in row] for row in rows],
        source_rows=[row[0].row for row in rows if row],
    )


@router.get("/table/image")
def table_image(title: Optional[str] = None, session: TableSession = Depends(get_session)):
    return Response(content=render_table_png(session.snapshot, title=title), media_type="image/png")


# ------------------------------
# Commands
# ------------------------------
@router.post("/command", response_model=CommandResponse)
async def run_command(req: CommandRequest, session: TableSession = Depends(get_session)):
    text = (req.text or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="`text` must not be empty")

    result, table = await session.run_command(text)
    return CommandResponse(
        table=table,
        changed=result.snapshot is not None,
        message=result.message,
        status=session.agent.get_provider_status(),
    )


@router.get("/status", response_model=StatusResponse)
def provider_status(session: TableSession = Depends(get_session)):
    return StatusResponse(status=session.agent.get_provider_status())
