import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from Core.utils import (
    option_bool,
    option_choice,
    option_float,
    option_int,
    option_probability,
    parse_key_value_options,
    setup_logging,
)


class TestParseOptions:
    def test_pairs_become_dict(self):
        assert parse_key_value_options(["iterations=10", " selection = rank_selection"]) == {
            "iterations": "10",
            "selection": "rank_selection",
        }

    def test_later_keys_win(self):
        assert parse_key_value_options(["a=1", "a=2"]) == {"a": "2"}

    def test_value_may_contain_equals(self):
        assert parse_key_value_options(["expr=a=b"]) == {"expr": "a=b"}

    @pytest.mark.parametrize("pair", ["iterations", "=5"])
    def test_malformed_pairs(self, pair):
        with pytest.raises(ValueError):
            parse_key_value_options([pair])


class TestOptionReaders:
    def test_defaults_when_missing_or_empty(self):
        assert option_int({}, "n", 7) == 7
        assert option_float({"t": ""}, "t", 1.5) == 1.5
        assert option_bool({}, "flag", False) is False
        assert option_choice({}, "policy", "replace", ["replace", "append"]) == "replace"

    def test_parsing(self):
        assert option_int({"n": "12"}, "n", 0) == 12
        assert option_float({"t": "1e-3"}, "t", 0.0) == pytest.approx(0.001)
        assert option_bool({"flag": "Yes"}, "flag", False) is True
        assert option_bool({"flag": "off"}, "flag", True) is False

    @pytest.mark.parametrize("call", [
        lambda: option_int({"n": "1.5"}, "n", 0),
        lambda: option_int({"n": "0"}, "n", 5, min_value=1),
        lambda: option_float({"t": "hot"}, "t", 1.0),
        lambda: option_probability({"p": "1.1"}, "p", 0.5),
        lambda: option_bool({"flag": "maybe"}, "flag", False),
        lambda: option_choice({"policy": "x"}, "policy", "replace", ["replace"]),
    ])
    def test_invalid_values(self, call):
        with pytest.raises(ValueError):
            call()


def test_setup_logging_writes_log_file(tmp_path):
    logger = setup_logging("tsp", "unit_test_problem", str(tmp_path))
    logger.info("hello from the test")
    for handler in logger.handlers:
        handler.flush()
    content = (tmp_path / "tsp_logs.log").read_text()
    assert "hello from the test" in content
    assert "[Problem: unit_test_problem]" in content
    # A second call reuses the configured logger.
    assert setup_logging("tsp", "unit_test_problem", str(tmp_path)) is logger
    assert len(logger.handlers) == 2
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
