import logging
from typing import Any
from typing import Dict
from typing import List
from typing import Mapping

from time_tracker import constants
from time_tracker import utils
from time_tracker.CalendarDate import CalendarDate
from time_tracker.errors import ActivityNameError
from time_tracker.errors import ActivityNotFoundError
from time_tracker.errors import DateError
from time_tracker.errors import DateOrderError
from time_tracker.errors import EmptySummaryError
from time_tracker.errors import MinuteLimitError
from time_tracker.errors import MinuteValueError
from time_tracker.errors import StructuredDataError

logger = logging.getLogger(__name__)

activity_map = Dict[str, int]


class Summary:
    """
    Totals of an :code:`ActivityLedger` over an inclusive range of dates. Averages are
    taken over the days in the range that have any data, not the whole span, and
    are truncated to whole minutes.
    """

    def __init__(
        self, start: CalendarDate, end: CalendarDate, totals: activity_map, num_days: int
    ) -> None:
        self.start = start
        self.end = end
        self.totals = dict(totals)
        self.num_days = num_days

    @property
    def averages(self) -> activity_map:
        return {
            activity: total // self.num_days for activity, total in self.totals.items()
        }

    def describe_range(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start} to {self.end}"

    def rows(self) -> List[List[str]]:
        """Report rows, header first, sorted by activity name"""
        averages = self.averages
        return [list(constants.SUMMARY_COLUMNS)] + [
            [activity, str(self.totals[activity]), str(averages[activity])]
            for activity in sorted(self.totals)
        ]

    def __str__(self) -> str:
        lines = [f"Summary for {self.describe_range()} ({self.num_days} day(s) with data)"]
        for row in self.rows():
            lines.append("".join(utils.pad_column(field) for field in row[:-1]) + row[-1])
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Summary({self.describe_range()}, totals={self.totals!r}, num_days={self.num_days})"


class ActivityLedger:
    """
    Minutes spent on named activities, recorded per date. No activity may total more
    than :code:`MINUTES_PER_DAY` on one date, and dates without activities are never
    stored. Methods either apply completely or raise without changing anything.
    """

    def __init__(self, data: Mapping[CalendarDate, Mapping[str, int]] = None) -> None:
        """
        Initialize an :code:`ActivityLedger`, optionally from existing data.

        :param data Mapping[CalendarDate, Mapping[str, int]]: Optional mapping of dates to
        activity minutes. It is copied; each entry goes through :code:`add`, so the same
        limits apply.
        """
        self._record: Dict[CalendarDate, activity_map] = {}
        for date, activities in ({} if data is None else data).items():
            for activity, minutes in activities.items():
                self.add(date, activity, minutes)

    @staticmethod
    def _check_minutes(minutes: int) -> None:
        # bool is an int subclass but never a meaningful minute count
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise MinuteValueError(f"Minutes must be a whole number, not {minutes!r}")
        if minutes < 0:
            raise MinuteValueError(f"Minutes must not be negative, got {minutes}")

    @staticmethod
    def _check_activity(activity: str) -> None:
        if not isinstance(activity, str) or activity == "":
            raise ActivityNameError(f"Activity name must be a non-empty string, not {activity!r}")

    def add(self, date: CalendarDate, activity: str, minutes: int) -> "ActivityLedger":
        """
        Add minutes to an activity on a date, creating either if needed.

        :param date CalendarDate: Date to record
        :param activity str: Activity name
        :param minutes int: Non-negative number of minutes
        :raises MinuteLimitError: If the activity's total for the date would exceed
        :code:`MINUTES_PER_DAY`. The stored total is left as it was.
        :rtype ActivityLedger: The instance
        """
        self._check_activity(activity)
        self._check_minutes(minutes)
        total = self._record.get(date, {}).get(activity, 0) + minutes
        if total > constants.MINUTES_PER_DAY:
            raise MinuteLimitError(
                f"Cannot add {minutes} minutes to {activity!r} on {date}: total of {total} "
                f"would exceed the limit of {constants.MINUTES_PER_DAY} minutes per day"
            )
        self._record.setdefault(date, {})[activity] = total
        logger.debug("Recorded %d minutes of %r on %s (total %d)", minutes, activity, date, total)
        return self

    def subtract(self, date: CalendarDate, activity: str, minutes: int) -> "ActivityLedger":
        """
        Remove minutes from an activity on a date. Taking away at least as many minutes
        as are stored deletes the activity, and deleting a date's last activity deletes
        the date.

        :param date CalendarDate: Date to change
        :param activity str: Activity name
        :param minutes int: Non-negative number of minutes
        :raises ActivityNotFoundError: If nothing is recorded for the date, or for the
        activity on that date
        :rtype ActivityLedger: The instance
        """
        self._check_minutes(minutes)
        activities = self._record.get(date)
        if activities is None:
            raise ActivityNotFoundError(f"no activities recorded for {date}")
        stored = activities.get(activity)
        if stored is None:
            raise ActivityNotFoundError(f"no minutes recorded for {activity} on {date}")
        if minutes >= stored:
            del activities[activity]
            logger.debug("Removed %r from %s", activity, date)
            if not activities:
                del self._record[date]
                logger.debug("Removed %s, which has no activities left", date)
        else:
            activities[activity] = stored - minutes
        return self

    def totals(self, start_date: CalendarDate, end_date: CalendarDate) -> Summary:
        """
        Sum minutes per activity over every date from :code:`start_date` to
        :code:`end_date`, inclusive.

        :param start_date CalendarDate: First date to include
        :param end_date CalendarDate: Last date to include
        :raises DateOrderError: If :code:`end_date` is before :code:`start_date`
        :raises EmptySummaryError: If no minutes are recorded in the range
        :rtype Summary: Totals and the number of dates that had data
        """
        if end_date < start_date:
            raise DateOrderError(
                f"End date {end_date} is before start date {start_date}"
            )
        totals: activity_map = {}
        num_days = 0
        date = start_date
        while True:
            activities = self._record.get(date)
            if activities:
                num_days += 1
                for activity, minutes in activities.items():
                    totals[activity] = totals.get(activity, 0) + minutes
            if date == end_date:
                break
            date = date.add_days(1)
        if sum(totals.values()) == 0:
            raise EmptySummaryError(f"no data for {start_date} to {end_date}")
        return Summary(start_date, end_date, totals, num_days)

    def summarize(self, start_date: CalendarDate, end_date: CalendarDate) -> str:
        """Text report of :code:`totals`: a header, then one tab-aligned row per activity"""
        return str(self.totals(start_date, end_date))

    def to_structured(self) -> Dict[str, activity_map]:
        """
        Convert to plain nested dicts suitable for JSON: datestamp keys in date order,
        each mapped to a dict of activity minutes. Distinct dates always give distinct
        keys, and no stored date has an empty activity map.

        :rtype Dict[str, Dict[str, int]]: The converted data
        """
        return {str(date): dict(self._record[date]) for date in self.dates()}

    def from_structured(self, data: Any) -> "ActivityLedger":
        """
        Replace all content with data shaped like the output of :code:`to_structured`.
        Malformed entries are skipped one by one; dates left with no activities are
        dropped.

        :param data Any: Parsed structured value, normally a dict
        :raises StructuredDataError: If no valid dates remain. The instance is unchanged.
        :rtype ActivityLedger: The instance
        """
        record: Dict[CalendarDate, activity_map] = {}
        items = data.items() if isinstance(data, Mapping) else []
        for datestamp, activities in items:
            if not isinstance(datestamp, str):
                logger.debug("Skipping entry %r: key is not a string", datestamp)
                continue
            try:
                date = CalendarDate.from_string(datestamp)
            except DateError as e:
                logger.debug("Skipping entry %r: %s", datestamp, e)
                continue
            if date in record:
                logger.debug("Skipping entry %r: %s is already recorded", datestamp, date)
                continue
            if not isinstance(activities, Mapping):
                logger.debug("Skipping entry %r: activities are not a mapping", datestamp)
                continue
            parsed = {
                activity: minutes
                for activity, minutes in activities.items()
                if self._valid_entry(datestamp, activity, minutes)
            }
            if parsed:
                record[date] = parsed
            else:
                logger.debug("Skipping entry %r: no valid activities", datestamp)
        if not record:
            raise StructuredDataError("Structured data contains no valid date entries")
        self._record = record
        return self

    @staticmethod
    def _valid_entry(datestamp: str, activity: Any, minutes: Any) -> bool:
        valid = (
            isinstance(activity, str)
            and activity != ""
            and isinstance(minutes, int)
            and not isinstance(minutes, bool)
            and 0 <= minutes <= constants.MINUTES_PER_DAY
        )
        if not valid:
            logger.debug("Skipping activity %r on %r with minutes %r", activity, datestamp, minutes)
        return valid

    @classmethod
    def from_structured_data(cls, data: Any) -> "ActivityLedger":
        """Alternate constructor wrapping :code:`from_structured`"""
        return cls().from_structured(data)

    def dates(self) -> List[CalendarDate]:
        return sorted(self._record)

    def minutes(self, date: CalendarDate, activity: str) -> int:
        """Minutes recorded for an activity on a date, or 0 if none"""
        return self._record.get(date, {}).get(activity, 0)

    def copy(self) -> "ActivityLedger":
        return self.__class__(self._record)

    def equals(self, other: "ActivityLedger") -> bool:
        """
        Determine whether two instances contain the same data.

        :param other "ActivityLedger": Another :code:`ActivityLedger` instance.
        :rtype bool: :code:`True` if the data are identical, :code:`False` otherwise
        """
        return self._record == other._record

    def __eq__(self, other) -> bool:
        if not isinstance(other, ActivityLedger):
            return NotImplemented
        return self.equals(other)

    def __getitem__(self, date: CalendarDate) -> activity_map:
        # Copy so callers cannot bypass the limits
        return dict(self._record[date])

    def __contains__(self, date) -> bool:
        return date in self._record

    def __len__(self) -> int:
        return len(self._record)

    def __str__(self) -> str:
        return f"""An ActivityLedger object with {len(self)} date(s)
        {self.to_structured()!r}"""

    def __repr__(self) -> str:
        return self.__str__()
