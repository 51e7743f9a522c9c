"""Configuration for Monte Carlo option simulation."""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from quant_engine.errors import (
    InvalidParameter,
    require_count,
    require_finite,
    require_positive,
)


class OptionType(Enum):
    CALL = "call"
    PUT = "put"


@dataclass(frozen=True)
class SimulationConfig:
    initial_price: float             # S0
    strike: float                    # K
    expiry: float                    # T, years
    rate: float                      # r, annualized decimal
    volatility: float                # sigma, annualized decimal

    # Simulation
    iterations: int = 2000           # N paths
    steps: int = 50                  # M steps per path
    option_type: OptionType = OptionType.CALL
    seed: int | None = None

    def __post_init__(self):
        require_positive("initial_price", self.initial_price)
        require_positive("strike", self.strike)
        require_positive("expiry", self.expiry)
        require_finite("rate", self.rate)
        require_positive("volatility", self.volatility)
        require_count("iterations", self.iterations)
        require_count("steps", self.steps)
        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, (int, np.integer)):
                raise InvalidParameter("seed", self.seed, "must be an integer or None")
            if self.seed < 0:
                raise InvalidParameter("seed", self.seed, "must be non-negative")
        if not isinstance(self.option_type, OptionType):
            try:
                kind = OptionType(str(self.option_type).lower())
            except ValueError:
                raise InvalidParameter(
                    "option_type", self.option_type, "must be 'call' or 'put'"
                ) from None
            object.__setattr__(self, "option_type", kind)
