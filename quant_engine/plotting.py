"""Charts for the three calculators: payoff curve, MC path fan, allocation pies."""

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker

from quant_engine.options.black_scholes import OptionParameters, price_curve
from quant_engine.portfolio.rebalance import RebalanceReport, allocation_breakdown
from quant_engine.simulation.config import SimulationConfig
from quant_engine.simulation.engine import SimulationResult

COLORS = ["#10b981", "#3b82f6", "#8b5cf6", "#f59e0b", "#06b6d4", "#6366f1", "#14b8a6"]

_money = mticker.FuncFormatter(lambda x, _: f"${x:,.0f}")


def _finish(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=120)
        plt.close(fig)
    else:
        plt.show(block=True)
    return fig


def plot_price_curve(params: OptionParameters, save_path=None):
    """Call and put value against spot, strike marked."""
    curve = price_curve(params)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(curve["spot"], curve["call"], color="#10b981", linewidth=2, label="Call")
    ax.plot(curve["spot"], curve["put"], color="#8b5cf6", linewidth=2, label="Put")
    ax.axvline(x=params.strike, color="gray", linestyle="--", linewidth=0.8,
               label=f"Strike ${params.strike:,.2f}")

    ax.set_title(
        f"Black-Scholes value  |  K={params.strike:,.2f}  T={params.expiry:.2f}y  "
        f"r={params.rate:.1%}  sigma={params.volatility:.1%}",
        fontsize=11, fontweight="bold",
    )
    ax.set_xlabel("Spot Price ($)", fontsize=10)
    ax.set_ylabel("Option Value ($)", fontsize=10)
    ax.legend(loc="upper center", fontsize=9, framealpha=0.9)
    ax.grid(True, alpha=0.25, linestyle="--")
    ax.xaxis.set_major_formatter(_money)
    return _finish(fig, save_path)


def plot_simulation(result: SimulationResult, config: SimulationConfig, save_path=None):
    """Sampled GBM paths with strike line and a result summary box."""
    fig, ax = plt.subplots(figsize=(14, 7))

    for i, path in enumerate(result.visual_paths):
        ax.plot(result.time_grid, path, color=COLORS[i % len(COLORS)],
                alpha=0.5, linewidth=0.8)

    ax.axhline(y=config.strike, color="red", linestyle="--", linewidth=0.8,
               alpha=0.7, label=f"Strike ${config.strike:,.2f}")
    ax.axhline(y=config.initial_price, color="black", linestyle=":",
               linewidth=0.8, alpha=0.5, label=f"Start ${config.initial_price:,.2f}")

    lo, hi = result.confidence_interval_95
    ax.annotate(
        f"{result.option_type.value.title()} price: ${result.option_price:,.4f}\n"
        f"Std error: {result.standard_error:.4f}  (95% CI {lo:,.2f} - {hi:,.2f})\n"
        f"Prob ITM: {result.in_the_money_probability:.1f}%\n"
        f"VaR (95%): ${result.value_at_risk:,.4f}",
        xy=(0.02, 0.96), xycoords="axes fraction",
        ha="left", va="top", fontsize=9,
        bbox=dict(boxstyle="round,pad=0.4", facecolor="wheat", alpha=0.85),
    )

    fig.suptitle(
        f"GBM Monte Carlo  |  {result.iterations:,} paths x {result.steps} steps  |  "
        f"sigma={config.volatility:.1%}  r={config.rate:.1%}",
        fontsize=11, fontweight="bold",
    )
    ax.set_xlabel("Time (years)", fontsize=10)
    ax.set_ylabel("Price ($)", fontsize=10)
    ax.legend(loc="upper right", fontsize=9, framealpha=0.9)
    ax.grid(True, alpha=0.25, linestyle="--")
    ax.yaxis.set_major_formatter(_money)
    ax.margins(x=0.02)
    return _finish(fig, save_path)


def plot_allocation(report: RebalanceReport, save_path=None):
    """Current vs target allocation pies."""
    breakdown = allocation_breakdown(report)

    fig, (ax_cur, ax_tgt) = plt.subplots(1, 2, figsize=(12, 6))
    for ax, column, title in (
        (ax_cur, "current_value", "Current"),
        (ax_tgt, "target_value", "Target"),
    ):
        data = breakdown[breakdown[column] > 0]
        if data.empty:
            ax.text(0.5, 0.5, "No data", ha="center", va="center")
        else:
            ax.pie(
                data[column], labels=data["name"], autopct="%1.1f%%",
                colors=[COLORS[i % len(COLORS)] for i in range(len(data))],
                wedgeprops=dict(width=0.4, edgecolor="white"),
            )
        ax.set_title(title, fontsize=10)

    status = "valid" if report.is_valid else f"INVALID ({report.total_allocation:.1f}%)"
    fig.suptitle(
        f"Portfolio ${report.total_value:,.2f}  |  allocation {status}",
        fontsize=11, fontweight="bold",
    )
    return _finish(fig, save_path)
