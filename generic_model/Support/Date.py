from __future__ import annotations

import re
from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from generic_model.Config import settings

DateLike = Union[datetime, date, int, float, str]


class DateFactory:
    """
    Date capability used by date casts.

    Every datetime it returns is timezone-aware, in the configured
    application timezone unless the input already carried one.
    """

    STANDARD_DATE_PATTERN = re.compile(r'^(\d{4})-(\d{1,2})-(\d{1,2})$')

    def __init__(self, timezone_name: Optional[str] = None) -> None:
        self.timezone_name = timezone_name or settings.APP_TIMEZONE
        self.tz: tzinfo = timezone.utc if self.timezone_name.upper() == 'UTC' else ZoneInfo(self.timezone_name)

    def instance(self, value: datetime) -> datetime:
        """Attach the application timezone to a naive datetime."""
        if value.tzinfo is None:
            return value.replace(tzinfo=self.tz)
        return value

    def create_from_timestamp(self, value: Union[int, float]) -> datetime:
        return datetime.fromtimestamp(value, tz=self.tz)

    def create_from_format(self, fmt: str, value: str) -> datetime:
        return self.instance(datetime.strptime(value, fmt))

    def parse(self, value: DateLike, fmt: Optional[str] = None) -> datetime:
        """
        Parse a value into an aware datetime.

        Datetimes and dates are taken as is, numbers are UNIX timestamps,
        "YYYY-MM-DD" strings are midnight of that day. Other strings are read
        with the given format, then as ISO 8601. A ValueError is raised when
        nothing matches.
        """
        if isinstance(value, datetime):
            return self.instance(value)

        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=self.tz)

        if isinstance(value, bool):
            raise ValueError(f"Unable to parse [{value!r}] as a date")

        if isinstance(value, (int, float)):
            return self.create_from_timestamp(value)

        text = str(value).strip()

        if re.fullmatch(r'-?\d+(\.\d+)?', text):
            return self.create_from_timestamp(float(text))

        match = self.STANDARD_DATE_PATTERN.match(text)
        if match:
            year, month, day = (int(part) for part in match.groups())
            return datetime(year, month, day, tzinfo=self.tz)

        if fmt:
            try:
                return self.create_from_format(fmt, text)
            except ValueError:
                pass

        return self.instance(datetime.fromisoformat(text))

    def start_of_day(self, value: datetime) -> datetime:
        return value.replace(hour=0, minute=0, second=0, microsecond=0)

    def format(self, value: datetime, fmt: str) -> str:
        return value.strftime(fmt)
