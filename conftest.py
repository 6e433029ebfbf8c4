import datetime
import json
from typing import Dict

import pytest
from click.testing import CliRunner

from time_tracker import ActivityLedger
from time_tracker import CalendarDate
from time_tracker import command
from time_tracker import Session


class Helpers:
    """See https://stackoverflow.com/questions/33508060/create-and-import-helper-functions-in-tests-without-creating-packages-in-test-di for this hack"""

    # Classes for convenience
    CalendarDate = CalendarDate.CalendarDate
    ActivityLedger = ActivityLedger.ActivityLedger
    TrackerSession = Session.TrackerSession
    tracker = command.tracker

    # Worked example: two days with data in a two-month range
    structured_data = {
        "2023-2-1": {"guitar": 30, "school": 180},
        "2023-3-1": {"school": 210},
    }
    expected_totals = {"guitar": 30, "school": 390}
    expected_averages = {"guitar": 15, "school": 195}
    # Every entry malformed in a different way
    malformed_data = {
        "2023-2-1": {"guitar": "hello"},
        "2023.3.1": {"school": 210},
        "2023-4-1": ["guitar", 30],
    }

    @staticmethod
    def date(datestamp : str) -> "CalendarDate.CalendarDate":
        return __class__.CalendarDate.from_string(datestamp)

    @staticmethod
    def to_datetime(date) -> datetime.date:
        return datetime.date(*date.to_tuple())

    @staticmethod
    def step_day(date):
        """Reference one-day step written independently of add_days"""
        year, month, day = date.to_tuple()
        if day < CalendarDate.days_in_month(year, month):
            return __class__.CalendarDate(year, month, day + 1)
        if month < 12:
            return __class__.CalendarDate(year, month + 1, 1)
        return __class__.CalendarDate(year + 1, 1, 1)

    @staticmethod
    def full_ledger(data : Dict[str, Dict[str, int]] = None):
        data = __class__.structured_data if data is None else data
        return __class__.ActivityLedger().from_structured(data)

    @staticmethod
    def write_data(path, data = None) -> None:
        data = __class__.structured_data if data is None else data
        with open(path, "w") as f:
            json.dump(data, f)

    @staticmethod
    def read_data(path) -> dict:
        with open(path) as f:
            return json.load(f)

    @staticmethod
    def invoke(*args):
        """Run the command line interface in-process"""
        return CliRunner().invoke(__class__.tracker, [str(arg) for arg in args])

    @staticmethod
    def report_rows(report : str) -> Dict[str, list]:
        """Parse summary report rows into {activity: [total, average]}"""
        rows = {}
        for line in report.splitlines()[2:]:
            fields = [field for field in line.split("\t") if field != ""]
            rows[fields[0]] = [int(x) for x in fields[1:]]
        return rows

@pytest.fixture
def helpers():
    return Helpers


@pytest.fixture
def data_path(tmp_path):
    return str(tmp_path / "tracker_data.json")
