"""
Geometric Brownian Motion Monte Carlo engine for European options.

Model: dS = r * S * dt + sigma * S * dW   (risk-neutral)
Exact: S(t+dt) = S(t) * exp((r - 0.5*sigma^2)*dt + sigma*sqrt(dt)*Z)

Plain Monte Carlo estimator: no antithetic or control variates.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

from quant_engine.config import DEFAULT_SETTINGS, EngineSettings
from quant_engine.simulation.config import OptionType, SimulationConfig

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    option_price: float              # mean discounted payoff
    standard_error: float
    in_the_money_probability: float  # percent
    value_at_risk: float             # price minus 5th percentile payoff
    visual_paths: np.ndarray         # (<=20, steps+1), display only
    time_grid: np.ndarray            # (steps+1,), years
    option_type: OptionType
    iterations: int
    steps: int

    @property
    def confidence_interval_95(self) -> tuple[float, float]:
        half = 1.96 * self.standard_error
        return (self.option_price - half, self.option_price + half)

    def summary(self) -> dict:
        lo, hi = self.confidence_interval_95
        return {
            "option_type": self.option_type.value,
            "iterations": self.iterations,
            "steps": self.steps,
            "option_price": self.option_price,
            "standard_error": self.standard_error,
            "ci_95_low": lo,
            "ci_95_high": hi,
            "itm_probability_pct": self.in_the_money_probability,
            "value_at_risk": self.value_at_risk,
        }


def _nonzero_uniform(rng: np.random.Generator, size) -> np.ndarray:
    """Uniform(0, 1) draws with exact zeros redrawn (log singularity)."""
    u = rng.random(size)
    zero = u == 0.0
    while zero.any():
        u[zero] = rng.random(int(zero.sum()))
        zero = u == 0.0
    return u


def box_muller(rng: np.random.Generator, size) -> np.ndarray:
    """Standard normal variates from pairs of uniforms (cosine branch only)."""
    u1 = _nonzero_uniform(rng, size)
    u2 = _nonzero_uniform(rng, size)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


def simulate_paths(
    config: SimulationConfig,
    rng: np.random.Generator,
) -> np.ndarray:
    """Risk-neutral GBM paths, shape (iterations, steps+1), column 0 is S0."""
    n_paths, n_steps = config.iterations, config.steps
    sigma = config.volatility
    dt = config.expiry / n_steps

    drift = (config.rate - 0.5 * sigma**2) * dt
    diffusion = sigma * math.sqrt(dt)

    Z = box_muller(rng, (n_paths, n_steps))
    log_increments = drift + diffusion * Z

    paths = np.empty((n_paths, n_steps + 1))
    paths[:, 0] = config.initial_price
    paths[:, 1:] = config.initial_price * np.exp(np.cumsum(log_increments, axis=1))
    return paths


def terminal_payoffs(terminal: np.ndarray, strike: float, option_type: OptionType) -> np.ndarray:
    if option_type is OptionType.CALL:
        return np.maximum(terminal - strike, 0.0)
    return np.maximum(strike - terminal, 0.0)


def run_simulation(
    config: SimulationConfig,
    rng: np.random.Generator | int | None = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> SimulationResult:
    """
    Price a European option by Monte Carlo and report its tail risk.

    Args:
        config: Validated simulation inputs.
        rng: Generator or seed. Falls back to ``config.seed``, then fresh
            OS entropy, so unseeded runs differ from each other.
        settings: VaR confidence and display path limit.

    Returns:
        SimulationResult. Statistics use all paths; ``visual_paths`` is an
        evenly strided subsample for charts.
    """
    generator = np.random.default_rng(config.seed if rng is None else rng)
    n = config.iterations

    logger.info(
        "Simulating %s: %d paths x %d steps (S0=%.4f K=%.4f T=%.4f r=%.4f sigma=%.4f)",
        config.option_type.value, n, config.steps, config.initial_price,
        config.strike, config.expiry, config.rate, config.volatility,
    )

    paths = simulate_paths(config, generator)
    payoffs = terminal_payoffs(paths[:, -1], config.strike, config.option_type)
    itm_count = int(np.count_nonzero(payoffs > 0.0))

    discounted = payoffs * math.exp(-config.rate * config.expiry)
    option_price = float(np.mean(discounted))
    # mean(x^2) - mean(x)^2 can dip below zero from cancellation
    variance = max(float(np.mean(discounted**2)) - option_price**2, 0.0)
    standard_error = math.sqrt(variance / n)

    tail = round(1.0 - settings.var_confidence, 12)
    index = min(int(math.floor(tail * n)), n - 1)
    payoff_quantile = float(np.sort(discounted)[index])
    value_at_risk = option_price - payoff_quantile

    stride = max(1, n // settings.max_visual_paths)
    picks = np.arange(0, n, stride)[: settings.max_visual_paths]

    result = SimulationResult(
        option_price=option_price,
        standard_error=standard_error,
        in_the_money_probability=100.0 * itm_count / n,
        value_at_risk=value_at_risk,
        visual_paths=paths[picks].copy(),
        time_grid=np.linspace(0.0, config.expiry, config.steps + 1),
        option_type=config.option_type,
        iterations=n,
        steps=config.steps,
    )
    logger.debug(
        "MC price=%.6f se=%.6f itm=%.2f%% var=%.6f",
        option_price, standard_error, result.in_the_money_probability, value_at_risk,
    )
    return result


def paths_frame(result: SimulationResult) -> pd.DataFrame:
    """Display paths as a step-indexed table, one ``pathN`` column per path."""
    columns = [f"path{i}" for i in range(result.visual_paths.shape[0])]
    frame = pd.DataFrame(result.visual_paths.T, columns=columns)
    frame.index.name = "step"
    frame.insert(0, "time", result.time_grid)
    return frame
