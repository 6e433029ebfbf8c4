import json
from contextlib import contextmanager
from typing import List
from typing import Union

import click

from time_tracker import constants
from time_tracker import utils
from time_tracker.CalendarDate import CalendarDate
from time_tracker.errors import DateError
from time_tracker.errors import TrackerError
from time_tracker.Session import TrackerSession
# Click class for shared arguments
# https://stackoverflow.com/questions/40182157/shared-options-and-flags-between-commands


class StandardCommandFactory:
    """Creates a Click command class that inherits parameters from another command"""

    def configure(self, commands : Union[List, None] = None) -> None:
        """
        Add parameters to share
        :param commands: List List of parameters to add
        """
        self.commands = [] if commands is None else commands

    def create(self) -> type:
        included_params = list(self.commands)

        class StandardCommand(click.Command):
            def __init__(self, *args, **kwargs) -> None:
                super().__init__(*args, **kwargs)
                self.params.extend(included_params)

        return StandardCommand


class DateParamType(click.ParamType):
    """Converts year-month-day strings, or 'today', to :code:`CalendarDate`"""
    name = "date"

    def convert(self, value, param, ctx) -> CalendarDate:
        if isinstance(value, CalendarDate):
            return value
        try:
            return utils.handle_date_arg(value)
        except DateError as e:
            self.fail(str(e), param, ctx)


DATE = DateParamType()
MINUTES = click.IntRange(min=0)


@contextmanager
def reported_errors():
    """Turn tracker errors into a message on stderr and exit status 1"""
    try:
        yield
    except (TrackerError, PermissionError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
def tracker():
    """Record minutes spent on activities and summarize them over dates."""
    pass


@click.option("--verbose", default=False, is_flag = True, help=constants.HELP_MAP["verbose"])
@click.option("--data_path", help=constants.HELP_MAP["data_path"], default=None)
@tracker.command(name="show")
def show(data_path : Union[str, None] = None, verbose : bool = False):
    """Print all recorded data as JSON."""
    utils.configure_logging(verbose)
    with reported_errors():
        session = TrackerSession.open(data_path)
        click.echo(json.dumps(session.ledger.to_structured(), indent=constants.JSON_INDENT))
    return 0


shared = show.params

factory = StandardCommandFactory()
factory.configure(commands=shared)
standard_command = factory.create()


@tracker.command(name="add", cls=standard_command)
@click.argument("date", type=DATE)
@click.argument("activity")
@click.argument("minutes", type=MINUTES)
def add(
    date : CalendarDate,
    activity : str,
    minutes : int,
    data_path : Union[str, None] = None,
    verbose : bool = False,
):
    """Add MINUTES to ACTIVITY on DATE."""
    utils.configure_logging(verbose)
    with reported_errors():
        with TrackerSession.open(data_path) as session:
            session.ledger.add(date, activity, minutes)
    if verbose:
        click.echo(
            f"Added {minutes} minutes of {activity!r} on {date} "
            f"(now {session.ledger.minutes(date, activity)}) to {session.data_path}"
        )
    return 0


@tracker.command(name="sub", cls=standard_command)
@click.argument("date", type=DATE)
@click.argument("activity")
@click.argument("minutes", type=MINUTES)
def sub(
    date : CalendarDate,
    activity : str,
    minutes : int,
    data_path : Union[str, None] = None,
    verbose : bool = False,
):
    """Subtract MINUTES from ACTIVITY on DATE, removing it once nothing is left."""
    utils.configure_logging(verbose)
    with reported_errors():
        with TrackerSession.open(data_path) as session:
            session.ledger.subtract(date, activity, minutes)
    if verbose:
        click.echo(
            f"Subtracted {minutes} minutes of {activity!r} on {date} "
            f"(now {session.ledger.minutes(date, activity)}) in {session.data_path}"
        )
    return 0


@tracker.command(name="sum", cls=standard_command)
@click.argument("start_date", type=DATE)
@click.argument("end_date", type=DATE, required=False, default=None)
def summarize(
    start_date : CalendarDate,
    end_date : Union[CalendarDate, None] = None,
    data_path : Union[str, None] = None,
    verbose : bool = False,
):
    """Summarize minutes per activity from START_DATE to END_DATE (inclusive).

    With no END_DATE, summarizes START_DATE alone.
    """
    utils.configure_logging(verbose)
    end_date = start_date if end_date is None else end_date
    with reported_errors():
        session = TrackerSession.open(data_path)
        click.echo(session.ledger.summarize(start_date, end_date))
    return 0
