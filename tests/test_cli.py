from __future__ import annotations

import json
import runpy
from pathlib import Path

import pytest

from sales_reporting import cli
from sales_reporting.utils.period import ReportPeriod

SALES = [
    {"Date": "2024-03-05T00:00:00", "Amount": 100, "Currency": "USD"},
    {"Date": "2024-03-10T00:00:00", "Amount": 50, "Currency": "EUR"},
    {"Date": "2024-04-01T00:00:00", "Amount": 999, "Currency": "GBP"},
]


@pytest.fixture()
def sales_json(tmp_path: Path) -> Path:
    path = tmp_path / "sales.json"
    path.write_text(json.dumps(SALES), encoding="utf-8")
    return path


def test_parse_args_year_month() -> None:
    args = cli.parse_args(["--year", "2024", "--month", "3"])

    assert args.period == ReportPeriod(2024, 3)
    assert args.source == "sales.json"
    assert args.retries == 1
    assert args.dry_run is False


def test_parse_args_period() -> None:
    assert cli.parse_args(["--period", "2023-12"]).period == ReportPeriod(2023, 12)


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--year", "2024"],
        ["--period", "2024-03", "--month", "3"],
        ["--period", "March"],
        ["--period", "2024-03", "--retries", "0"],
        ["--period", "2024-03", "--base-currency", "EUR"],
    ],
)
def test_parse_args_rejects_invalid_combinations(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(argv)


def test_main_writes_report(sales_json: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "out"

    exit_code = cli.main(
        [
            "--year",
            "2024",
            "--month",
            "3",
            "--source",
            str(sales_json),
            "--output-dir",
            str(out_dir),
        ]
    )

    assert exit_code == 0
    assert (out_dir / "report_2024_03.txt").read_text(encoding="utf-8").splitlines() == [
        "Monatlicher Verkaufsbericht (03/2024)",
        "-" * 40,
        "Gesamt Umsatz in USD: 155.00",
    ]


def test_main_uses_rate_file(sales_json: Path, tmp_path: Path) -> None:
    rates = tmp_path / "rates.json"
    rates.write_text(json.dumps({"EUR": 2}), encoding="utf-8")

    exit_code = cli.main(
        [
            "--period",
            "2024-03",
            "--source",
            str(sales_json),
            "--output-dir",
            str(tmp_path),
            "--rates",
            str(rates),
            "--retries",
            "2",
        ]
    )

    assert exit_code == 0
    report = (tmp_path / "report_2024_03.txt").read_text(encoding="utf-8")
    assert "Gesamt Umsatz in USD: 200.00" in report


def test_main_dry_run_prints_report(
    sales_json: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = cli.main(
        [
            "--period",
            "2024-03",
            "--source",
            str(sales_json),
            "--output-dir",
            str(tmp_path),
            "--dry-run",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines()[-1] == "Gesamt Umsatz in USD: 155.00"
    assert not (tmp_path / "report_2024_03.txt").exists()


def test_main_returns_error_code_on_source_failure(tmp_path: Path) -> None:
    exit_code = cli.main(
        [
            "--period",
            "2024-03",
            "--source",
            str(tmp_path / "missing.json"),
            "--output-dir",
            str(tmp_path),
        ]
    )

    assert exit_code == 1
    assert not (tmp_path / "report_2024_03.txt").exists()


def test_script_wrapper_invokes_main(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {"value": False}

    def _fake_main() -> int:
        called["value"] = True
        return 0

    monkeypatch.setattr(cli, "main", _fake_main)

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("sales_reporting.scripts.create_monthly_report", run_name="__main__")

    assert excinfo.value.code == 0
    assert called["value"] is True


@pytest.mark.parametrize("db_name", ["sales.db", "nodir/sales.db"])
def test_main_returns_error_code_for_unusable_database(tmp_path: Path, db_name: str) -> None:
    db_path = tmp_path / db_name

    exit_code = cli.main(
        [
            "--period",
            "2024-03",
            "--source",
            str(db_path),
            "--output-dir",
            str(tmp_path / "out"),
        ]
    )

    assert exit_code == 1
    assert not db_path.exists()
    assert not (tmp_path / "out").exists()


def test_main_returns_error_code_for_unopenable_report_database(
    sales_json: Path, tmp_path: Path
) -> None:
    exit_code = cli.main(
        [
            "--period",
            "2024-03",
            "--source",
            str(sales_json),
            "--output-dir",
            f"sqlite:///{tmp_path / 'nodir' / 'reports.db'}",
        ]
    )

    assert exit_code == 1
