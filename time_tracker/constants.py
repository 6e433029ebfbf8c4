# Commands help
HELP_MAP = {
    "data_path": "Path to JSON file where tracked minutes are stored (default $TRACKER_DATA, else tracker_data.json)",
    "verbose": "Print a description of command's outcome and enable debug logging",
}

DATA_PATH_VARIABLE = "TRACKER_DATA"
LOG_LEVEL_VARIABLE = "TRACKER_LOG_LEVEL"
DEFAULT_DATA_PATH = "tracker_data.json"
DEFAULT_LOG_LEVEL = "WARNING"

MINUTES_PER_DAY = 1440
MONTHS_IN_YEAR = 12
# Years are stored as unsigned 16-bit values
MIN_YEAR = 0
MAX_YEAR = 65535

DATE_SEPARATOR = "-"
TODAY = "today"
JSON_INDENT = 4
TAB_WIDTH = 8
SUMMARY_COLUMNS = ("Activity", "Total", "Average")
