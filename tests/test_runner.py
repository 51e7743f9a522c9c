"""Smoke tests: each CLI command runs end to end."""
import sys

import pytest

from quant_engine import runner
from quant_engine.errors import InvalidParameter
from quant_engine.portfolio.rebalance import Action


def test_price_command(capsys):
    result = runner.run(["price", "--spot", "100", "--strike", "100"])
    assert result.call_price == pytest.approx(10.4506, abs=1e-3)
    assert "Call Price" in capsys.readouterr().out


def test_price_command_plot(tmp_path):
    out = tmp_path / "curve.png"
    runner.run(["price", "--plot", str(out)])
    assert out.exists()


def test_simulate_command(tmp_path, capsys):
    out = tmp_path / "paths.png"
    result = runner.run([
        "simulate", "--iterations", "500", "--steps", "10",
        "--option-type", "put", "--seed", "3", "--plot", str(out),
    ])
    assert result.iterations == 500
    assert out.exists()
    assert "VaR (95%)" in capsys.readouterr().out


def test_rebalance_inline_assets(capsys):
    report = runner.run([
        "rebalance",
        "--asset", "US Stocks=50000:40",
        "--asset", "Bonds=30000:30",
        "--asset", "International=20000:30",
    ])
    assert [a.action for a in report.actions] == [Action.SELL, Action.HOLD, Action.BUY]
    assert "REBALANCING ACTIONS" in capsys.readouterr().out


def test_rebalance_csv(tmp_path):
    csv = tmp_path / "book.csv"
    csv.write_text(
        "name,current_value,target_allocation\n"
        "Stocks,60000,50\n"
        "Bonds,40000,40\n"
    )
    out = tmp_path / "alloc.png"
    report = runner.run(["rebalance", "--csv", str(csv), "--plot", str(out)])
    assert not report.is_valid
    assert report.actions[0].asset.id == "1"
    assert out.exists()


def test_bad_asset_spec():
    with pytest.raises(InvalidParameter, match="NAME=VALUE:ALLOC"):
        runner.run(["rebalance", "--asset", "Bonds-30000"])


def test_main_exits_on_invalid_input(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["quant-engine", "price", "--expiry", "0"])
    with pytest.raises(SystemExit) as exc:
        runner.main()
    assert exc.value.code == 2


def test_rebalance_missing_csv(tmp_path):
    with pytest.raises(InvalidParameter, match="could not be read"):
        runner.run(["rebalance", "--csv", str(tmp_path / "nope.csv")])


def test_rebalance_csv_non_numeric_cell(tmp_path):
    csv = tmp_path / "book.csv"
    csv.write_text(
        "name,current_value,target_allocation\n"
        "Stocks,lots,50\n"
    )
    with pytest.raises(InvalidParameter) as exc:
        runner.run(["rebalance", "--csv", str(csv)])
    assert exc.value.field == "csv line 2"


def test_main_exits_on_unreadable_csv(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", [
        "quant-engine", "rebalance", "--csv", str(tmp_path / "nope.csv"),
    ])
    with pytest.raises(SystemExit) as exc:
        runner.main()
    assert exc.value.code == 2
