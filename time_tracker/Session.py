import json
import logging
import os
import shutil
import tempfile
from os.path import abspath
from os.path import dirname
from os.path import exists
from typing import Union

from time_tracker import constants
from time_tracker import utils
from time_tracker.ActivityLedger import ActivityLedger
from time_tracker.errors import StorageError
from time_tracker.errors import StructuredDataError

logger = logging.getLogger(__name__)


class TrackerSession:
    """
    One run of the tracker: the ledger stored at a data file path, loaded once and
    saved once. Use :code:`TrackerSession.open` as a context manager to save only
    if the block finishes without an exception.
    """

    def __init__(self, data_path: Union[str, None] = None) -> None:
        """
        Initialize a :code:`TrackerSession` holding an empty ledger.

        :param data_path str: Optional path to the JSON data file. Defaults to
        :code:`$TRACKER_DATA`, or :code:`tracker_data.json` if it is unset.
        """
        self.data_path = utils.data_path() if data_path is None else data_path
        self.ledger = ActivityLedger()

    @classmethod
    def open(cls, data_path: Union[str, None] = None) -> "TrackerSession":
        """Alternate constructor that loads the data file immediately"""
        return cls(data_path=data_path).load()

    @property
    def data_path(self) -> str:
        return self._data_path

    @data_path.setter
    def data_path(self, data_path: str) -> None:
        if not (
            (exists(data_path) and utils.path_readable(data_path))
            or utils.can_write_file(data_path)
        ):
            raise PermissionError(f"You lack read or write permission for {data_path}")
        self._data_path = data_path

    def load(self) -> "TrackerSession":
        """
        Read the data file into the ledger. A missing or empty file leaves the ledger
        empty, as does a file with no valid entries.

        :raises StorageError: If the file cannot be read or is not valid JSON
        :rtype TrackerSession: The instance
        """
        if not exists(self.data_path):
            logger.info("%s does not exist; starting with no data", self.data_path)
            return self
        try:
            with open(self.data_path, encoding="utf-8") as f:
                contents = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Load from file error: cannot read {self.data_path!r}") from e
        if contents.strip() == "":
            return self
        try:
            data = json.loads(contents)
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Load from file error: cannot parse contents of {self.data_path!r}"
            ) from e
        try:
            self.ledger.from_structured(data)
        except StructuredDataError as e:
            logger.warning("No usable data in %s: %s", self.data_path, e)
        else:
            logger.info("Loaded %d date(s) from %s", len(self.ledger), self.data_path)
        return self

    def save(self) -> "TrackerSession":
        """
        Write the ledger to the data file as indented JSON. The file is replaced in one
        step, so an interrupted save leaves the previous contents intact.

        :raises StorageError: If the file cannot be written
        :rtype TrackerSession: The instance
        """
        data = self.ledger.to_structured()
        directory = dirname(abspath(self.data_path))
        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", dir=directory, prefix=".tracker-", suffix=".tmp", delete=False,
                encoding="utf-8",
            ) as f:
                temp_path = f.name
                json.dump(data, f, indent=constants.JSON_INDENT)
            # Temporary files are created owner-only; keep the existing file's mode
            if exists(self.data_path):
                shutil.copymode(self.data_path, temp_path)
            os.replace(temp_path, self.data_path)
        except OSError as e:
            if temp_path is not None and exists(temp_path):
                os.remove(temp_path)
            raise StorageError(f"Save to file error: cannot write to {self.data_path!r}") from e
        logger.info("Saved %d date(s) to %s", len(data), self.data_path)
        return self

    def __enter__(self) -> "TrackerSession":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if exc_type is None:
            self.save()

    def __str__(self) -> str:
        return f"A TrackerSession for {self.data_path}\n{self.ledger!r}"

    def __repr__(self) -> str:
        return self.__str__()
