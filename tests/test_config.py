"""
tests/test_config.py

Tests for loading allotment_config.csv.
Requires 'pytest' to run.
"""
import os
import pytest
from examplanner.config import AllotmentConfig, load_config


def write_config(tmp_path, body: str) -> str:
    path = tmp_path / "allotment_config.csv"
    path.write_text("parameter,value\n" + body)
    return str(path)


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(str(tmp_path / "nope.csv"))
    assert config == AllotmentConfig()
    assert config.roll_number_order is True
    assert config.headcount_basis == "capacity"

def test_values_are_parsed(tmp_path):
    path = write_config(tmp_path, "roll_number_order, No\nheadcount_basis,occupancy\nsample_seed, 42\n")
    config = load_config(path)

    assert config.roll_number_order is False
    assert config.headcount_basis == "occupancy"
    assert config.sample_seed == 42
    assert config.verify_plans is True

def test_unknown_parameter_is_ignored(tmp_path, capsys):
    config = load_config(write_config(tmp_path, "colour,blue\n"))

    assert config == AllotmentConfig()
    assert "colour" in capsys.readouterr().out

@pytest.mark.parametrize("body", [
    "verify_plans,maybe\n",
    "sample_students,lots\n",
    "headcount_basis,enrolment\n",
])
def test_bad_values_raise(tmp_path, body):
    with pytest.raises(ValueError):
        load_config(write_config(tmp_path, body))

def test_missing_columns_raise(tmp_path):
    path = tmp_path / "allotment_config.csv"
    path.write_text("key,setting\nsample_seed,1\n")
    with pytest.raises(ValueError):
        load_config(str(path))

def test_bundled_config_loads():
    path = os.path.join(os.path.dirname(__file__), "..", "data", "allotment_config.csv")
    config = load_config(path)
    assert config.sample_students == 400
