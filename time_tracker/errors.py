"""
Exception types raised by :code:`time_tracker`.

Every exception derives from :code:`TrackerError`, so the command line layer
can report any of them uniformly. Each also derives from the closest builtin
(:code:`ValueError`, :code:`LookupError`, ...) so callers that only know the
builtins still catch them.
"""


class TrackerError(Exception):
    """Base exception for the activity tracker."""
    pass


class DateError(TrackerError):
    """A calendar date could not be built or moved."""
    pass


class DateValueError(DateError, ValueError):
    """Year, month or day outside its valid range."""
    pass


class DateParseError(DateError, ValueError):
    """Date string is not in year-month-day form."""
    pass


class DateRangeError(DateError, OverflowError):
    """Day arithmetic left the representable years."""
    pass


class LedgerError(TrackerError):
    """A ledger operation was rejected."""
    pass


class ActivityNameError(LedgerError, ValueError):
    pass


class MinuteValueError(LedgerError, ValueError):
    pass


class MinuteLimitError(LedgerError, ValueError):
    """An activity's total for one day would exceed the minutes in a day."""
    pass


class ActivityNotFoundError(LedgerError, LookupError):
    pass


class DateOrderError(LedgerError, ValueError):
    """Summary requested with the end date before the start date."""
    pass


class EmptySummaryError(LedgerError, LookupError):
    """No minutes recorded anywhere in a summarized range."""
    pass


class StructuredDataError(LedgerError, ValueError):
    """Structured data could not be converted to or from a ledger."""
    pass


class StorageError(LedgerError, OSError):
    """The data file could not be read, parsed or written."""
    pass
