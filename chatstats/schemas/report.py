"""
Pydantic schemas for report responses.
"""
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from chatstats.core.errors import ErrorCode, ReportError

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """
    Shared response shape ``{is_ok, msg, data}``.

    ``error_code`` travels with the result for the caller's benefit and is
    left out of the serialized body.
    """
    is_ok: bool = True
    msg: Optional[str] = None
    data: Optional[T] = None
    error_code: ErrorCode = Field(default=ErrorCode.OK, exclude=True)

    @property
    def is_error(self) -> bool:
        return self.error_code != ErrorCode.OK

    @classmethod
    def success(cls, data: T) -> "Envelope[T]":
        return cls(is_ok=True, msg=None, data=data)

    @classmethod
    def failure(cls, error: ReportError) -> "Envelope[T]":
        return cls(is_ok=False, msg=error.message, data=None, error_code=error.code)


class GroupCount(BaseModel):
    """Messages posted to one group today."""
    name: str
    msg_count: int


GroupCountsEnvelope = Envelope[List[GroupCount]]
DailyCountsEnvelope = Envelope[Dict[str, int]]


class HealthResponse(BaseModel):
    """Response schema for health endpoints."""
    status: str
    checks: Optional[dict] = None
