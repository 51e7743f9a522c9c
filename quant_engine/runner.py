"""
CLI runner for the quant-engine calculators.

Usage:
    python -m quant_engine.runner price --spot 100 --strike 100 \
        --expiry 1 --rate 0.05 --sigma 0.2

    python -m quant_engine.runner simulate --spot 100 --strike 105 \
        --expiry 0.5 --rate 0.05 --sigma 0.3 --iterations 5000 --steps 100 \
        --option-type put --seed 42 --plot mc.png

    # Assets inline (NAME=VALUE:ALLOC) or from a CSV with columns
    # id,name,current_value,target_allocation
    python -m quant_engine.runner rebalance \
        --asset "US Stocks=50000:40" --asset "Bonds=30000:30" \
        --asset "International=20000:30"
    python -m quant_engine.runner rebalance --csv portfolio.csv
"""

import argparse
import logging
import sys

import pandas as pd

from quant_engine.errors import InvalidParameter
from quant_engine.options.black_scholes import OptionParameters, price_option
from quant_engine.portfolio.rebalance import Asset, rebalance_portfolio
from quant_engine.simulation.config import SimulationConfig
from quant_engine.simulation.engine import run_simulation

logger = logging.getLogger(__name__)


def _parse_assets(raw):
    """Parse ['Bonds=30000:30', ...] into Asset list."""
    assets = []
    for i, pair in enumerate(raw or [], start=1):
        try:
            name, spec = pair.rsplit("=", 1)
            value, alloc = spec.split(":")
            assets.append(Asset(
                id=str(i),
                name=name.strip(),
                current_value=float(value),
                target_allocation=float(alloc),
            ))
        except ValueError:
            raise InvalidParameter("asset", pair, "must look like NAME=VALUE:ALLOC") from None
    return assets


def _load_assets_csv(path):
    try:
        df = pd.read_csv(path)
    except (OSError, ValueError) as exc:
        raise InvalidParameter("csv", path, f"could not be read ({exc})") from None
    missing = {"name", "current_value", "target_allocation"} - set(df.columns)
    if missing:
        raise InvalidParameter("csv", path, f"is missing columns {sorted(missing)}")
    if "id" not in df.columns:
        df["id"] = [str(i) for i in range(1, len(df) + 1)]
    df = df.fillna({"name": "", "current_value": 0.0, "target_allocation": 0.0})
    assets = []
    for line, row in enumerate(df.itertuples(index=False), start=2):
        try:
            assets.append(Asset(
                id=str(row.id),
                name=str(row.name),
                current_value=float(row.current_value),
                target_allocation=float(row.target_allocation),
            ))
        except ValueError:
            raise InvalidParameter(
                f"csv line {line}", (row.current_value, row.target_allocation),
                "must hold numeric current_value and target_allocation",
            ) from None
    return assets


def _print_table(title, rows):
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    for label, value in rows:
        if label is None:
            print("  " + "-" * 56)
        else:
            print(f"  {label:.<35} {value}")
    print("=" * 60)


def _cmd_price(args):
    params = OptionParameters(
        spot=args.spot, strike=args.strike, expiry=args.expiry,
        rate=args.rate, volatility=args.sigma,
    )
    bs = price_option(params)
    _print_table("BLACK-SCHOLES-MERTON", [
        ("Call Price", f"${bs.call_price:,.4f}"),
        ("Put Price", f"${bs.put_price:,.4f}"),
        (None, None),
        ("Delta (call / put)", f"{bs.delta:.4f} / {bs.put_delta:.4f}"),
        ("Gamma", f"{bs.gamma:.6f}"),
        ("Theta/day (call / put)", f"{bs.theta:.4f} / {bs.put_theta:.4f}"),
        ("Vega (per 1% vol)", f"{bs.vega:.4f}"),
        ("Rho (per 1% rate, call / put)", f"{bs.rho:.4f} / {bs.put_rho:.4f}"),
    ])

    if args.plot:
        from quant_engine.plotting import plot_price_curve
        plot_price_curve(params, save_path=args.plot)
    return bs


def _cmd_simulate(args):
    config = SimulationConfig(
        initial_price=args.spot, strike=args.strike, expiry=args.expiry,
        rate=args.rate, volatility=args.sigma,
        iterations=args.iterations, steps=args.steps,
        option_type=args.option_type, seed=args.seed,
    )
    print(f"\nSimulating {config.iterations:,} paths x {config.steps} steps...")
    result = run_simulation(config)
    lo, hi = result.confidence_interval_95
    _print_table(f"MONTE CARLO {result.option_type.value.upper()}", [
        ("Model", "GBM (Geometric Brownian Motion)"),
        ("Paths", f"{result.iterations:,}"),
        ("Steps", f"{result.steps}"),
        (None, None),
        ("Option Price", f"${result.option_price:,.4f}"),
        ("Std Error", f"{result.standard_error:.4f}"),
        ("95% CI", f"${lo:,.4f} - ${hi:,.4f}"),
        ("Prob In-The-Money", f"{result.in_the_money_probability:.1f}%"),
        ("VaR (95%)", f"${result.value_at_risk:,.4f}"),
    ])

    if args.plot:
        from quant_engine.plotting import plot_simulation
        plot_simulation(result, config, save_path=args.plot)
    return result


def _cmd_rebalance(args):
    assets = _load_assets_csv(args.csv) if args.csv else _parse_assets(args.asset)
    report = rebalance_portfolio(assets)

    print("\n" + "=" * 80)
    print("  REBALANCING ACTIONS")
    print("=" * 80)
    print(f"  {'Asset':<20} {'Current':>12} {'Target %':>9} {'Target':>12} {'Delta':>12} {'Action':>7}")
    print("  " + "-" * 76)
    for a in report.actions:
        print(f"  {(a.asset.name or 'Unnamed'):<20} ${a.asset.current_value:>11,.2f} "
              f"{a.asset.target_allocation:>8.2f}% ${a.target_value:>11,.2f} "
              f"${a.delta:>+11,.2f} {a.action.value:>7}")
    print("  " + "-" * 76)
    print(f"  Total value:      ${report.total_value:,.2f}")
    print(f"  Total allocation: {report.total_allocation:.2f}%"
          f"{'' if report.is_valid else '  (does not sum to 100%)'}")
    print(f"  Actionable:       {len(report.actionable)} of {len(report.actions)}")
    print("=" * 80)

    if args.plot:
        from quant_engine.plotting import plot_allocation
        plot_allocation(report, save_path=args.plot)
    return report


def _add_option_args(p):
    p.add_argument("--spot", type=float, default=100.0, help="Spot / initial price")
    p.add_argument("--strike", type=float, default=100.0)
    p.add_argument("--expiry", type=float, default=1.0, help="Years to expiry")
    p.add_argument("--rate", type=float, default=0.05, help="Risk-free rate (decimal)")
    p.add_argument("--sigma", type=float, default=0.20, help="Volatility (decimal)")


def build_parser():
    parser = argparse.ArgumentParser(description="quant-engine calculators")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_price = sub.add_parser("price", help="Black-Scholes price and Greeks")
    _add_option_args(p_price)
    p_price.add_argument("--plot", default=None, help="Save payoff curve to PATH")
    p_price.set_defaults(func=_cmd_price)

    p_sim = sub.add_parser("simulate", help="Monte Carlo price and VaR")
    _add_option_args(p_sim)
    p_sim.add_argument("--iterations", type=int, default=2000)
    p_sim.add_argument("--steps", type=int, default=50)
    p_sim.add_argument("--option-type", choices=["call", "put"], default="call")
    p_sim.add_argument("--seed", type=int, default=None)
    p_sim.add_argument("--plot", default=None, help="Save path chart to PATH")
    p_sim.set_defaults(func=_cmd_simulate)

    p_reb = sub.add_parser("rebalance", help="Drift rebalancing actions")
    p_reb.add_argument("--asset", action="append", default=[],
                       help="NAME=VALUE:ALLOC, repeatable")
    p_reb.add_argument("--csv", default=None,
                       help="CSV with name,current_value,target_allocation")
    p_reb.add_argument("--plot", default=None, help="Save allocation pies to PATH")
    p_reb.set_defaults(func=_cmd_rebalance)

    return parser


def run(args=None):
    parsed = build_parser().parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return parsed.func(parsed)


def main():
    try:
        run()
    except InvalidParameter as exc:
        logger.error("Invalid input: %s", exc)
        sys.exit(2)


if __name__ == "__main__":
    main()
