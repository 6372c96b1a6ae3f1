"""
Report endpoints for message-count statistics.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from chatstats.core.config import Settings, get_settings
from chatstats.core.database import get_db
from chatstats.core.errors import ErrorCode
from chatstats.schemas.report import DailyCountsEnvelope, Envelope, GroupCountsEnvelope
from chatstats.services.report import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])

# Envelope error codes to HTTP status
STATUS_BY_ERROR = {
    ErrorCode.OK: 200,
    ErrorCode.PARSE_ERROR: 400,
    ErrorCode.RANGE_ERROR: 400,
    ErrorCode.QUERY_ERROR: 500,
}


def get_report_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReportService:
    """A fresh service per request."""
    return ReportService(db, settings)


def _respond(envelope: Envelope, response: Response) -> Envelope:
    response.status_code = STATUS_BY_ERROR.get(envelope.error_code, 500)
    return envelope


@router.get(
    "/groups/today",
    response_model=GroupCountsEnvelope,
    summary="Today's message count per group",
    description="Groups with at least one message today, ordered by message count descending."
)
async def today_group_counts(
    response: Response,
    service: Annotated[ReportService, Depends(get_report_service)],
) -> GroupCountsEnvelope:
    return _respond(service.get_today_group_counts(), response)


@router.get(
    "/daily",
    response_model=DailyCountsEnvelope,
    summary="Message count per day",
    description="Zero-filled message counts for every day of an inclusive date range."
)
async def daily_counts(
    response: Response,
    service: Annotated[ReportService, Depends(get_report_service)],
    start_date: Annotated[str, Query(description="First day of the range, e.g. 2021-01-01")],
    end_date: Annotated[Optional[str], Query(description="Last day of the range; defaults to today")] = None,
) -> DailyCountsEnvelope:
    """
    Message counts per calendar day.

    - **start_date**: first day, inclusive
    - **end_date**: last day, inclusive (today when omitted)

    Malformed dates and inverted ranges return ``is_ok: false`` with status 400.
    """
    return _respond(service.get_daily_counts(start_date, end_date), response)
