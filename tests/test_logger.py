import pytest
import os
import pandas as pd

# Modules to be tested
from utils.logger import Logger, pprint, truncate_str
from tests.helpers import build_nested_profiler


# --- Fixtures ---
@pytest.fixture
def logger_config(tmp_path):
    return {
        "run_name": "test_run",
        "runs_root": str(tmp_path),
        "save_csv": True,
        "config": {"steps": 3, "color": False} # Sample settings
    }


# --- Logger Tests ---
def test_logger_initialization(logger_config, capsys):
    logger = Logger(**logger_config)

    expected_dir = os.path.join(logger_config["runs_root"], logger_config["run_name"])
    assert os.path.isdir(expected_dir)
    assert logger.dir_name == expected_dir
    assert logger.save_csv is True
    assert logger._rows == []

    out = capsys.readouterr().out
    assert "Setting" in out and "Value" in out
    assert "steps" in out

def test_logger_without_csv_creates_no_directory(tmp_path):
    logger = Logger(run_name="quiet", runs_root=str(tmp_path), save_csv=False)
    assert not os.path.exists(logger.dir_name)
    logger.close()
    assert not os.path.exists(logger.dir_name)

def test_logger_runs_root_from_env(mocker, tmp_path):
    mocker.patch("utils.logger.load_env_config",
                 return_value={"enable": True, "runs_root": str(tmp_path / "env_runs")})
    logger = Logger(run_name="r")
    assert logger.dir_name == os.path.join(str(tmp_path / "env_runs"), "r")

def test_logger_default_run_name(tmp_path):
    logger = Logger(runs_root=str(tmp_path))
    assert logger.run_name  # timestamp based
    assert logger.dir_name.startswith(str(tmp_path))

def test_log_report_prints_table_and_keeps_rows(logger_config, clock, capsys):
    ts = build_nested_profiler(clock)
    logger = Logger(**logger_config)
    capsys.readouterr()

    logger.log_report(ts, width=80, color=False)

    out = capsys.readouterr().out
    assert "Action" in out
    assert "checkpoint" in out
    assert "total_elapsed" in out
    assert "1.125000s" in out
    assert len(logger._rows) == 4
    assert logger._rows[0] == {
        "depth": 1, "label": "outer", "elapsed": 1.0, "is_scope": True,
        "color": "FF0000", "share": "88.9%",
    }

def test_log_report_without_csv_keeps_nothing(tmp_path, clock):
    ts = build_nested_profiler(clock)
    logger = Logger(run_name="r", runs_root=str(tmp_path), save_csv=False)
    logger.log_report(ts, color=False)
    assert logger._rows == []

def test_logger_save2csv(logger_config, clock, tmp_path):
    ts = build_nested_profiler(clock)
    logger = Logger(**logger_config)
    logger.log_rows(ts.collect_rows())

    csv_path = tmp_path / logger_config["run_name"] / "report.csv"
    logger.save2csv(file_name=str(csv_path))

    assert csv_path.exists()
    df = pd.read_csv(csv_path)
    assert list(df.columns) == ['depth', 'label', 'elapsed', 'is_scope', 'color', 'share']
    assert len(df) == 4
    assert df.iloc[0]['label'] == "outer"
    assert df.iloc[1]['depth'] == 2
    assert df.iloc[3]['elapsed'] == 1.125

def test_logger_close_writes_default_csv(logger_config, clock):
    ts = build_nested_profiler(clock)
    logger = Logger(**logger_config)
    logger.log_rows(ts.collect_rows())
    logger.close()

    assert os.path.exists(os.path.join(logger.dir_name, "report.csv"))

def test_logger_save2csv_nothing_logged(logger_config):
    logger = Logger(**logger_config)
    logger.save2csv()
    assert not os.path.exists(os.path.join(logger.dir_name, "report.csv"))


# --- Helper function tests ---
def test_pprint(capsys):
    pprint({"key1": "value1", "a_very_long_key_that_will_be_truncated_for_sure": 12345})
    out = capsys.readouterr().out
    assert "key1" in out
    assert "value1" in out
    assert "a_very_long_key_that_will_be_truncate..." in out

def test_truncate_str():
    assert truncate_str("short", 10) == "short"
    assert truncate_str("exactly10c", 10) == "exactly10c"
    assert truncate_str("this is longer", 10) == "this is..."
