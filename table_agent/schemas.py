# table_agent/schemas.py
from typing import List, Optional

from pydantic import BaseModel

from table_agent.models import TableSnapshot
from table_agent.provider import ProviderStatus
from table_agent.views import FilterCriteria, SortConfig


class CommandRequest(BaseModel):
    text: str


class CommandResponse(BaseModel):
    table: TableSnapshot
    changed: bool
    message: str
    status: ProviderStatus


class StatusResponse(BaseModel):
    status: ProviderStatus


class ViewRequest(BaseModel):
    filter: Optional[FilterCriteria] = None
    sort: Optional[SortConfig] = None


class ViewResponse(BaseModel):
    headers: List[str]
    rows: List[List[int]]
    # canonical (0-based) snapshot row of each displayed row
    source_rows: List[int]
