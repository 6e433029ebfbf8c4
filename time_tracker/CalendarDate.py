import datetime
import re
from functools import total_ordering
from typing import Tuple

from time_tracker import constants
from time_tracker.errors import DateParseError
from time_tracker.errors import DateRangeError
from time_tracker.errors import DateValueError

# Unsigned integer with an optional leading plus sign
_DIGITS = re.compile(r"\+?[0-9]+")

# Months with 30 days; February is handled separately
_SHORT_MONTHS = frozenset((4, 6, 9, 11))


def is_leap_year(year: int) -> bool:
    """Gregorian rule: every fourth year, except centuries not divisible by 400"""
    return year % 4 == 0 and not (year % 100 == 0 and year % 400 != 0)


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in a month of a given year.

    :param year int: Year, needed to decide February's length
    :param month int: Month in :code:`range(1, 13)`
    :rtype int: 28, 29, 30 or 31
    """
    if month in _SHORT_MONTHS:
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 31


@total_ordering
class CalendarDate:
    """
    A calendar date with no time or time zone component. Instances are validated on
    construction and never change afterwards; arithmetic returns new instances.
    Ordering is by year, then month, then day.
    """

    __slots__ = ("_year", "_month", "_day")

    def __init__(self, year: int, month: int, day: int) -> None:
        """
        Initialize a CalendarDate, validating each field in turn.

        :param year int: Year in :code:`range(MIN_YEAR, MAX_YEAR + 1)`
        :param month int: Month in :code:`range(1, 13)`
        :param day int: Day, from 1 to the length of the month in that year
        :raises DateValueError: If any field is out of range
        """
        if year < constants.MIN_YEAR:
            raise DateValueError(f"Set date error: year too small ({year})")
        if year > constants.MAX_YEAR:
            raise DateValueError(f"Set date error: year too large ({year})")
        if month < 1:
            raise DateValueError(f"Set date error: month too small ({month})")
        if month > constants.MONTHS_IN_YEAR:
            raise DateValueError(f"Set date error: month too large ({month})")
        if day < 1:
            raise DateValueError(f"Set date error: day too small ({day})")
        if day > days_in_month(year, month):
            raise DateValueError(
                f"Set date error: day too large ({day} for {year}-{month})"
            )
        self._year = year
        self._month = month
        self._day = day

    @classmethod
    def from_ints(cls, year: int, month: int, day: int) -> "CalendarDate":
        return cls(year, month, day)

    @classmethod
    def from_string(cls, datestamp: str) -> "CalendarDate":
        """
        Parse a date formatted :code:`"year-month-day"`. Zero padding is allowed but
        not required, so :code:`"2023-02-01"` and :code:`"2023-2-1"` are the same date.
        Each part may carry one leading plus sign.

        :param datestamp str: String to parse
        :raises DateParseError: If the string does not have three numeric parts
        :raises DateValueError: If the parsed fields are out of range
        :rtype CalendarDate: The parsed date
        """
        parts = datestamp.split(constants.DATE_SEPARATOR)
        if len(parts) != 3:
            raise DateParseError(
                f"Date parse error: incorrect number of separators in {datestamp!r}"
            )
        fields = []
        for name, part in zip(("year", "month", "day"), parts):
            value = cls._parse_field(part)
            if value is None:
                raise DateParseError(
                    f"Date parse error: cannot parse {name} from {datestamp!r}"
                )
            fields.append(value)
        return cls.from_ints(*fields)

    @staticmethod
    def _parse_field(part: str):
        """Unsigned integer that fits the stored width, or None"""
        if _DIGITS.fullmatch(part) is None:
            return None
        value = int(part)
        return value if value <= constants.MAX_YEAR else None

    @classmethod
    def today(cls) -> "CalendarDate":
        """The current local date"""
        today = datetime.date.today()
        return cls(today.year, today.month, today.day)

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    def to_tuple(self) -> Tuple[int, int, int]:
        return (self._year, self._month, self._day)

    def __str__(self) -> str:
        return f"{self._year}-{self._month}-{self._day}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._year}, {self._month}, {self._day})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __lt__(self, other) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.to_tuple() < other.to_tuple()

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def add_days(self, days: int) -> "CalendarDate":
        """
        Return the date a given number of days later. Whole months are skipped at a
        time, so large offsets cost one step per month rather than per day.

        :param days int: Number of days to move forward. Negative values move back.
        :raises DateRangeError: If the result would fall after the last day of :code:`MAX_YEAR`
        :rtype CalendarDate: The new date
        """
        if days < 0:
            return self.sub_days(-days)
        year, month, day = self.to_tuple()
        while days > 0:
            remaining = days_in_month(year, month) - day
            if days <= remaining:
                day += days
                break
            # Jump to the first of the next month
            days -= remaining + 1
            day = 1
            if month == constants.MONTHS_IN_YEAR:
                if year >= constants.MAX_YEAR:
                    raise DateRangeError(
                        f"Add days error: year went above max ({constants.MAX_YEAR})"
                    )
                year += 1
                month = 1
            else:
                month += 1
        return self.__class__(year, month, day)

    def sub_days(self, days: int) -> "CalendarDate":
        """
        Return the date a given number of days earlier.

        :param days int: Number of days to move back. Negative values move forward.
        :raises DateRangeError: If the result would fall before the first day of :code:`MIN_YEAR`
        :rtype CalendarDate: The new date
        """
        if days < 0:
            return self.add_days(-days)
        year, month, day = self.to_tuple()
        while days > 0:
            if days < day:
                day -= days
                break
            # Jump to the last day of the previous month
            days -= day
            if month == 1:
                if year <= constants.MIN_YEAR:
                    raise DateRangeError(
                        f"Subtract days error: year went below min ({constants.MIN_YEAR})"
                    )
                year -= 1
                month = constants.MONTHS_IN_YEAR
            else:
                month -= 1
            day = days_in_month(year, month)
        return self.__class__(year, month, day)
