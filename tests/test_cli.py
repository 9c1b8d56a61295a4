"""Tests for fincontract.cli — decoding shortcodes from the command line."""

from __future__ import annotations

import json
import logging
import logging.handlers
from pathlib import Path

import pytest

from fincontract.cli import EXIT_CONFIG, EXIT_FAILURES, EXIT_OK, build_parser, main
from fincontract.infra.config import (
    ENV_CATEGORIES,
    ENV_CONTRACT_TYPES,
    ENV_LOG_LEVEL,
    ENV_TICK_INTERVAL,
)

SCENARIO = "CALL_FRXUSDJPY_100_1491965798_1491965808_S0P_0"
PRICING = "1491965798"

pytestmark = pytest.mark.usefixtures("restore_root_logger")


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (ENV_CONTRACT_TYPES, ENV_CATEGORIES, ENV_TICK_INTERVAL, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


def _lines(capsys: pytest.CaptureFixture[str]) -> list[dict[str, object]]:
    return [json.loads(line) for line in capsys.readouterr().out.splitlines()]


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args(["--currency", "USD", SCENARIO])
        assert args.shortcodes == [SCENARIO]
        assert args.currency == "USD"
        assert args.pricing_time is None
        assert args.log_file is None

    def test_currency_is_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([SCENARIO])


class TestMain:
    def test_scenario(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--currency", "USD", "--pricing-time", PRICING, SCENARIO]) == EXIT_OK
        [line] = _lines(capsys)
        assert line["kind"] == "contract"
        assert line["category"] == "callput"
        assert line["date_expiry"] == 1491965808
        assert line["is_atm"] is True
        assert line["barrier_category"] == "euro_atm"
        assert line["supplied_barrier_type"] == "relative"
        assert line["is_forward_starting"] is False

    def test_one_line_per_shortcode(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([
            "--currency", "USD", "--pricing-time", PRICING,
            SCENARIO, "GARBAGE_xyz", "SPREADU_R_100_2_1400000000_10_20_DOLLAR",
        ])
        assert code == EXIT_OK
        assert [line["kind"] for line in _lines(capsys)] == ["contract", "legacy", "spread"]

    def test_failures_set_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        shortcode = "EXPIRYRANGE_FRXUSDJPY_100_1491965798_1491965808_S10P_0"
        assert main(["--currency", "USD", shortcode]) == EXIT_FAILURES
        [line] = _lines(capsys)
        error = line["error"]
        assert isinstance(error, dict)
        assert error["code"] == "CONTRACT_VALIDATION"
        assert str(error["message"]).startswith(shortcode)

    def test_log_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
        main(["--currency", "USD", SCENARIO])
        assert logging.getLogger().level == logging.DEBUG

    def test_log_file(self, tmp_path: Path) -> None:
        main(["--currency", "USD", "--log-file", str(tmp_path / "cli.log"), SCENARIO])
        assert any(
            isinstance(h, logging.handlers.TimedRotatingFileHandler)
            for h in logging.getLogger().handlers
        )

    def test_invalid_environment(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv(ENV_TICK_INTERVAL, "often")
        assert main(["--currency", "USD", SCENARIO]) == EXIT_CONFIG
        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err)["code"] == "CONFIG"

    def test_missing_reference_table(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv(ENV_CATEGORIES, str(tmp_path / "missing.yml"))
        assert main(["--currency", "USD", SCENARIO]) == EXIT_CONFIG
        assert capsys.readouterr().out == ""
