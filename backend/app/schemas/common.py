from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    message: str


class HuntingRow(BaseModel):
    id: str | None = None
    timestamp: str | None = None
    agentId: str = "-"
    agentName: str = "-"
    managerName: str = "-"
    ruleId: Any = "-"
    ruleLevel: Any = "-"
    ruleDescription: str = "-"
    groups: list[str] = Field(default_factory=list)
    location: str = "-"
    fullLog: str | None = None


class HuntingPage(BaseModel):
    success: Literal[True] = True
    page: int
    size: int
    total: int
    data: list[HuntingRow]
