"""
quant-engine: Black-Scholes pricing, GBM Monte Carlo simulation and
drift rebalancing as pure, stateless calculators.
"""
from .config import DEFAULT_SETTINGS, EngineSettings
from .errors import InvalidParameter
from .options.black_scholes import (
    BlackScholesResult,
    OptionParameters,
    black_scholes,
    price_curve,
    price_option,
)
from .portfolio.rebalance import (
    Action,
    Asset,
    RebalanceAction,
    RebalanceReport,
    allocation_breakdown,
    rebalance_portfolio,
)
from .simulation.config import OptionType, SimulationConfig
from .simulation.engine import SimulationResult, paths_frame, run_simulation

__all__ = [
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "InvalidParameter",
    "BlackScholesResult",
    "OptionParameters",
    "black_scholes",
    "price_curve",
    "price_option",
    "Action",
    "Asset",
    "RebalanceAction",
    "RebalanceReport",
    "allocation_breakdown",
    "rebalance_portfolio",
    "OptionType",
    "SimulationConfig",
    "SimulationResult",
    "paths_frame",
    "run_simulation",
]
