import logging
import os
from os import getenv
from os.path import abspath
from os.path import dirname
from os.path import exists
from typing import Callable
from typing import Union

from time_tracker import constants
from time_tracker.CalendarDate import CalendarDate


def data_path() -> str:
    """
    Returns the data file path known to :code:`time_tracker` - the :code:`TRACKER_DATA`
    environment variable if set, otherwise :code:`"tracker_data.json"` in the
    working directory.

    :rtype str: The path found.
    """
    return getenv(constants.DATA_PATH_VARIABLE, constants.DEFAULT_DATA_PATH)


def path_checker(permissions : int) -> Callable:
    """Create function to check whether a user has specified permissions to use a path

    :param permissions: One or more :code:`os` permission codes to check for (e.g., :code:`os.W_OK | os.X_OK` )
    :type permissions: int

    :return: Function with :code:`bool` return type that checks whether
    the user has the given permissions for some path
    """
    def inner(path : str):
        return os.access(path, permissions)
    return inner

path_readable = path_checker(os.R_OK)
path_writeable = path_checker(os.W_OK | os.X_OK)


def can_write_file(path : str) -> bool:
    """
    Whether a file can be written at :code:`path`: either it exists and is
    writeable, or its directory exists and allows creating files.
    """
    if exists(path):
        return os.access(path, os.W_OK)
    directory = dirname(abspath(path))
    return exists(directory) and path_writeable(directory)


def handle_date_arg(date: Union[CalendarDate, str, None]) -> CalendarDate:
    """
    Converts a string to :code:`CalendarDate`, treating :code:`"today"` as the
    current local date, and raises an error if it is :code:`None`

    :param date: Union[CalendarDate, str, None] Argument to process
    :rtype CalendarDate: The converted date
    """
    if isinstance(date, str):
        if date.strip().lower() == constants.TODAY:
            return CalendarDate.today()
        return CalendarDate.from_string(date)
    if date is None:
        raise ValueError(f"{None!r} not allowed as a date value")
    return date


def configure_logging(verbose : bool = False) -> None:
    """
    Set up root logging for command line use. :code:`verbose` forces DEBUG;
    otherwise the level comes from :code:`TRACKER_LOG_LEVEL` (default WARNING).
    """
    level = "DEBUG" if verbose else getenv(constants.LOG_LEVEL_VARIABLE, constants.DEFAULT_LOG_LEVEL)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def pad_column(text : str, width : int = constants.TAB_WIDTH) -> str:
    """
    Follow a report field with tabs so the next column starts at least two tab
    stops in: two tabs for a short field, one if it already fills a tab stop.
    """
    return text + ("\t" if len(text) >= width else "\t\t")
