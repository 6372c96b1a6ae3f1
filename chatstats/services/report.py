"""
Message-count reports over the chat message store.
"""
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chatstats.core.config import Settings
from chatstats.core.dates import day_bounds, iter_days, parse_date, today
from chatstats.core.errors import ErrorCode, QueryError, RangeError, ReportError
from chatstats.core.logging import get_logger
from chatstats.models.message import Group, Message, MessageContent
from chatstats.schemas.report import (
    DailyCountsEnvelope,
    Envelope,
    GroupCount,
    GroupCountsEnvelope,
)

logger = get_logger(__name__)


def _date_key(value) -> str:
    # DATE() comes back as a string on SQLite and a date elsewhere
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class ReportService:
    """
    Read-only report queries for a single request.

    Results are returned as envelopes; failures never escape as exceptions
    but come back with ``is_ok=False`` and the matching error code.
    """

    def __init__(
        self,
        db: Session,
        settings: Settings,
        clock: Optional[Callable[[], date]] = None,
    ):
        self.db = db
        self.settings = settings
        self.tz = settings.tzinfo
        self.clock = clock or (lambda: today(self.tz))

    def get_today_group_counts(self) -> GroupCountsEnvelope:
        """Message count per group for today, busiest group first."""
        day = self.clock()
        try:
            rows = self._query_group_counts(day)
        except ReportError as e:
            return self._failure(GroupCountsEnvelope, e)

        data = [GroupCount(name=row.name, msg_count=row.msg_count) for row in rows]
        logger.debug(
            "Generated today group counts",
            extra={"extra_data": {"date": day.isoformat(), "groups": len(data)}}
        )
        return GroupCountsEnvelope.success(data)

    def get_daily_counts(
        self,
        start_date: str,
        end_date: Optional[str] = None,
    ) -> DailyCountsEnvelope:
        """
        Message count per calendar day from ``start_date`` to ``end_date``.

        Every day of the range is present, zero when nothing was posted,
        keyed ``YYYY-MM-DD`` in ascending order. ``end_date`` defaults to
        today.
        """
        try:
            start, end = self._resolve_range(start_date, end_date)
            counts: Dict[str, int] = {day.isoformat(): 0 for day in iter_days(start, end)}
            for msg_date, nr_msg in self._query_daily_counts(start, end):
                key = _date_key(msg_date)
                if key in counts:
                    counts[key] = int(nr_msg)
        except ReportError as e:
            return self._failure(DailyCountsEnvelope, e)

        logger.debug(
            "Generated daily counts",
            extra={
                "extra_data": {
                    "start_date": start.isoformat(),
                    "end_date": end.isoformat(),
                    "days": len(counts),
                }
            }
        )
        return DailyCountsEnvelope.success(counts)

    def _resolve_range(self, start_date, end_date) -> Tuple[date, date]:
        start = parse_date(start_date, self.tz)
        end = parse_date(end_date, self.tz) if end_date else self.clock()

        if start > end:
            raise RangeError(
                f"start_date {start.isoformat()} is after end_date {end.isoformat()}"
            )
        days = (end - start).days + 1
        if days > self.settings.report_max_days:
            raise RangeError(
                f"Date range spans {days} days, limit is {self.settings.report_max_days}"
            )
        return start, end

    def _query_group_counts(self, day: date) -> List:
        start, end = day_bounds(day, day)
        msg_count = func.count(MessageContent.id).label("msg_count")
        try:
            return (
                self.db.query(Group.name, msg_count)
                .select_from(Message)
                .join(MessageContent, MessageContent.id == Message.id)
                .join(Group, Group.id == Message.chat_id)
                .filter(MessageContent.tg_date >= start, MessageContent.tg_date <= end)
                .group_by(Message.chat_id, Group.name)
                .order_by(msg_count.desc(), Group.name.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise QueryError("Failed to query group message counts") from e

    def _query_daily_counts(self, start: date, end: date) -> List:
        range_start, range_end = day_bounds(start, end)
        msg_date = func.date(MessageContent.tg_date).label("msg_date")
        try:
            return (
                self.db.query(msg_date, func.count(MessageContent.id).label("nr_msg"))
                .filter(
                    MessageContent.tg_date >= range_start,
                    MessageContent.tg_date <= range_end,
                )
                .group_by(msg_date)
                .order_by(msg_date.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise QueryError("Failed to query daily message counts") from e

    def _failure(self, envelope_cls, error: ReportError) -> Envelope:
        if error.code == ErrorCode.QUERY_ERROR:
            logger.error(f"Report query failed: {error.message}", exc_info=error.__cause__)
        else:
            logger.warning(
                f"Rejected report request: {error.message}",
                extra={"extra_data": {"error_code": int(error.code)}}
            )
        return envelope_cls.failure(error)
