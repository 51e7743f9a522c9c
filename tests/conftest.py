import matplotlib

matplotlib.use("Agg")

import pytest

from quant_engine.options.black_scholes import OptionParameters
from quant_engine.portfolio.rebalance import Asset


def sample_portfolio():
    """Three-asset book: 50/30/20 held against 40/30/30 targets."""
    return [
        Asset(id="1", name="US Stocks", current_value=50_000, target_allocation=40),
        Asset(id="2", name="Bonds", current_value=30_000, target_allocation=30),
        Asset(id="3", name="International", current_value=20_000, target_allocation=30),
    ]


@pytest.fixture
def benchmark_params():
    return OptionParameters(spot=100, strike=100, expiry=1, rate=0.05, volatility=0.2)


@pytest.fixture
def portfolio():
    return sample_portfolio()
