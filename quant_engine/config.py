from dataclasses import dataclass

from quant_engine.errors import (
    InvalidParameter,
    require_count,
    require_non_negative,
    require_positive,
)


@dataclass(frozen=True)
class EngineSettings:
    """Calculator tunables. Passed explicitly; never mutated at runtime."""

    # Pricing
    days_per_year: int = 365         # theta is quoted per calendar day

    # Simulation
    var_confidence: float = 0.95
    max_visual_paths: int = 20

    # Rebalancing
    rebalance_threshold: float = 0.01   # currency units
    allocation_tolerance: float = 0.01  # percentage points

    # Payoff curve
    curve_points: int = 50
    curve_low: float = 0.5     # fraction of spot
    curve_high: float = 1.5

    def __post_init__(self):
        require_count("days_per_year", self.days_per_year)
        confidence = require_positive("var_confidence", self.var_confidence)
        if confidence >= 1.0:
            raise InvalidParameter(
                "var_confidence", self.var_confidence, "must be between 0 and 1"
            )
        require_count("max_visual_paths", self.max_visual_paths)
        require_non_negative("rebalance_threshold", self.rebalance_threshold)
        require_positive("allocation_tolerance", self.allocation_tolerance)
        require_count("curve_points", self.curve_points)
        low = require_positive("curve_low", self.curve_low)
        if require_positive("curve_high", self.curve_high) <= low:
            raise InvalidParameter(
                "curve_high", self.curve_high, f"must exceed curve_low ({low})"
            )


DEFAULT_SETTINGS = EngineSettings()
