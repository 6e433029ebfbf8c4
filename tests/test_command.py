import datetime
import json

from time_tracker import constants


def test_add(helpers, data_path):
    result = helpers.invoke("add", "2023-2-1", "guitar", 30, "--data_path", data_path)
    assert result.exit_code == 0, result.output
    assert helpers.read_data(data_path) == {"2023-2-1": {"guitar": 30}}


def test_add_accumulates(helpers, data_path):
    helpers.write_data(data_path)
    helpers.invoke("add", "2023-02-01", "guitar", 15, "--data_path", data_path)
    assert helpers.read_data(data_path)["2023-2-1"] == {"guitar": 45, "school": 180}


def test_add_verbose(helpers, data_path):
    result = helpers.invoke("add", "2023-2-1", "guitar", 30, "--data_path", data_path, "--verbose")
    assert result.exit_code == 0
    assert "Added 30 minutes of 'guitar' on 2023-2-1" in result.output


def test_add_today(helpers, data_path):
    helpers.invoke("add", "today", "guitar", 30, "--data_path", data_path)
    today = datetime.date.today()
    assert helpers.read_data(data_path) == {f"{today.year}-{today.month}-{today.day}": {"guitar": 30}}


def test_add_over_limit(helpers, data_path):
    """Rejected additions report an error and leave the file alone"""
    helpers.write_data(data_path)
    result = helpers.invoke("add", "2023-2-1", "school", constants.MINUTES_PER_DAY, "--data_path", data_path)
    assert result.exit_code == 1
    assert "exceed the limit" in result.output
    assert helpers.read_data(data_path) == helpers.structured_data


def test_add_bad_date(helpers, data_path):
    result = helpers.invoke("add", "2023-2-30", "guitar", 30, "--data_path", data_path)
    assert result.exit_code == 2
    assert "day too large" in result.output


def test_add_bad_minutes(helpers, data_path):
    for minutes in ("thirty", "-5"):
        result = helpers.invoke("add", "2023-2-1", "guitar", minutes, "--data_path", data_path)
        assert result.exit_code == 2


def test_sub(helpers, data_path):
    helpers.write_data(data_path)
    result = helpers.invoke("sub", "2023-2-1", "school", 100, "--data_path", data_path)
    assert result.exit_code == 0
    assert helpers.read_data(data_path)["2023-2-1"] == {"guitar": 30, "school": 80}


def test_sub_removes_date(helpers, data_path):
    helpers.write_data(data_path)
    helpers.invoke("sub", "2023-3-1", "school", 500, "--data_path", data_path)
    assert "2023-3-1" not in helpers.read_data(data_path)


def test_sub_missing(helpers, data_path):
    helpers.write_data(data_path)
    result = helpers.invoke("sub", "2023-3-1", "guitar", 5, "--data_path", data_path)
    assert result.exit_code == 1
    assert "no minutes recorded for guitar on 2023-3-1" in result.output


def test_sum_range(helpers, data_path):
    helpers.write_data(data_path)
    result = helpers.invoke("sum", "2023-2-1", "2023-4-1", "--data_path", data_path)
    assert result.exit_code == 0
    assert helpers.report_rows(result.output) == {"guitar": [30, 15], "school": [390, 195]}


def test_sum_single_date(helpers, data_path):
    helpers.write_data(data_path)
    result = helpers.invoke("sum", "2023-2-1", "--data_path", data_path)
    assert result.exit_code == 0
    assert helpers.report_rows(result.output) == {"guitar": [30, 30], "school": [180, 180]}


def test_sum_does_not_write(helpers, data_path):
    with open(data_path, "w") as f:
        f.write(json.dumps(helpers.structured_data))
    helpers.invoke("sum", "2023-2-1", "--data_path", data_path)
    with open(data_path) as f:
        assert f.read() == json.dumps(helpers.structured_data)


def test_sum_errors(helpers, data_path):
    helpers.write_data(data_path)
    result = helpers.invoke("sum", "2023-4-1", "2023-2-1", "--data_path", data_path)
    assert result.exit_code == 1 and "before start date" in result.output
    result = helpers.invoke("sum", "2024-1-1", "--data_path", data_path)
    assert result.exit_code == 1 and "no data for 2024-1-1 to 2024-1-1" in result.output


def test_environment_data_path(helpers, data_path, monkeypatch):
    monkeypatch.setenv(constants.DATA_PATH_VARIABLE, data_path)
    helpers.invoke("add", "2023-2-1", "guitar", 30)
    assert helpers.read_data(data_path) == {"2023-2-1": {"guitar": 30}}


def test_show(helpers, data_path):
    helpers.write_data(data_path)
    result = helpers.invoke("show", "--data_path", data_path)
    assert result.exit_code == 0
    assert json.loads(result.output) == helpers.structured_data


def test_invalid_json_file(helpers, data_path):
    with open(data_path, "w") as f:
        f.write("{not json")
    result = helpers.invoke("add", "2023-2-1", "guitar", 30, "--data_path", data_path)
    assert result.exit_code == 1 and "cannot parse contents" in result.output


def test_shared_options_listed(helpers):
    for name in ("add", "sub", "sum", "show"):
        result = helpers.invoke(name, "--help")
        assert "--data_path" in result.output and "--verbose" in result.output


def test_not_utf8_file(helpers, data_path):
    with open(data_path, "wb") as f:
        f.write(b'{"2023-2-1": {"gu\xffitar": 30}}')
    result = helpers.invoke("add", "2023-2-1", "guitar", 30, "--data_path", data_path)
    assert result.exit_code == 1
    assert "cannot read" in result.output
