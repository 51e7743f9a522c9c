"""Tests for the closed-form Black-Scholes pricer."""
import math

import pytest

from quant_engine.config import EngineSettings
from quant_engine.errors import InvalidParameter
from quant_engine.options.black_scholes import (
    OptionParameters,
    black_scholes,
    norm_cdf,
    norm_pdf,
    price_curve,
    price_option,
)


# ── Normal distribution ──

def test_norm_cdf_reference_points():
    assert norm_cdf(0.0) == pytest.approx(0.5, abs=1e-9)
    assert norm_cdf(1.96) == pytest.approx(0.9750021, abs=1e-6)
    assert norm_cdf(-1.0) == pytest.approx(0.1586553, abs=1e-6)


def test_norm_cdf_symmetric():
    for x in (0.1, 0.35, 1.2, 2.5, 4.0):
        assert norm_cdf(x) + norm_cdf(-x) == pytest.approx(1.0, abs=1e-15)


def test_norm_cdf_tails():
    assert norm_cdf(40.0) == 1.0
    assert norm_cdf(-40.0) == 0.0


def test_norm_pdf_peak():
    assert norm_pdf(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))


# ── Pricing ──

def test_benchmark_prices(benchmark_params):
    result = price_option(benchmark_params)
    assert result.call_price == pytest.approx(10.4506, abs=1e-3)
    assert result.put_price == pytest.approx(5.5735, abs=1e-3)


def test_benchmark_greeks(benchmark_params):
    result = price_option(benchmark_params)
    assert result.d1 == pytest.approx(0.35)
    assert result.d2 == pytest.approx(0.15)
    assert result.delta == pytest.approx(0.63683, abs=1e-4)
    assert result.gamma == pytest.approx(0.018762, abs=1e-5)
    assert result.vega == pytest.approx(0.37524, abs=1e-4)
    assert result.theta == pytest.approx(-6.4140 / 365, abs=1e-5)
    assert result.rho == pytest.approx(0.53232, abs=1e-4)
    assert result.put_delta == pytest.approx(result.delta - 1.0)
    assert result.put_theta == pytest.approx(-1.6579 / 365, abs=1e-5)
    assert result.put_rho == pytest.approx(-0.41890, abs=1e-4)


@pytest.mark.parametrize("S,K,T,r,sigma", [
    (100, 100, 1, 0.05, 0.2),
    (50, 80, 0.25, 0.01, 0.45),
    (250, 180, 2.5, 0.08, 0.15),
    (10, 10.5, 0.01, 0.0, 0.9),
    (100, 95, 1, -0.01, 0.3),
])
def test_put_call_parity(S, K, T, r, sigma):
    result = black_scholes(S, K, T, r, sigma)
    lhs = result.call_price - result.put_price
    rhs = S - K * math.exp(-r * T)
    assert lhs == pytest.approx(rhs, abs=1e-5)


def test_deep_otm_call_near_zero():
    result = black_scholes(10, 1000, 1, 0.05, 0.2)
    assert result.call_price == pytest.approx(0.0, abs=1e-2)
    assert result.delta == pytest.approx(0.0, abs=1e-6)


def test_deep_itm_put_near_forward_intrinsic():
    result = black_scholes(10, 1000, 1, 0.05, 0.2)
    assert result.put_price == pytest.approx(1000 * math.exp(-0.05) - 10, abs=1e-2)


def test_deep_otm_put_near_zero():
    result = black_scholes(1000, 10, 1, 0.05, 0.2)
    assert result.put_price == pytest.approx(0.0, abs=1e-2)


def test_greek_bounds():
    for S in (60, 90, 100, 110, 160):
        result = black_scholes(S, 100, 0.5, 0.03, 0.25)
        assert 0.0 <= result.delta <= 1.0
        assert result.gamma >= 0.0
        assert result.vega >= 0.0
        assert result.theta < 0.0


def test_shorthand_matches_price_option(benchmark_params):
    assert black_scholes(100, 100, 1, 0.05, 0.2) == price_option(benchmark_params)


# ── Validation ──

@pytest.mark.parametrize("field,kwargs", [
    ("expiry", dict(spot=100, strike=100, expiry=0, rate=0.05, volatility=0.2)),
    ("volatility", dict(spot=100, strike=100, expiry=1, rate=0.05, volatility=0)),
    ("spot", dict(spot=-1, strike=100, expiry=1, rate=0.05, volatility=0.2)),
    ("strike", dict(spot=100, strike=0, expiry=1, rate=0.05, volatility=0.2)),
    ("rate", dict(spot=100, strike=100, expiry=1, rate=float("nan"), volatility=0.2)),
    ("volatility", dict(spot=100, strike=100, expiry=1, rate=0.05, volatility=float("inf"))),
])
def test_invalid_parameters_rejected(field, kwargs):
    with pytest.raises(InvalidParameter) as exc:
        OptionParameters(**kwargs)
    assert exc.value.field == field
    assert isinstance(exc.value, ValueError)


def test_shorthand_rejects_zero_expiry():
    with pytest.raises(InvalidParameter, match="expiry must be positive"):
        black_scholes(100, 100, 0, 0.05, 0.2)


# ── Payoff curve ──

def test_price_curve_shape(benchmark_params):
    curve = price_curve(benchmark_params)
    assert list(curve.columns) == ["spot", "call", "put"]
    assert len(curve) == 51
    assert curve["spot"].iloc[0] == pytest.approx(50.0)
    assert curve["spot"].iloc[-1] == pytest.approx(150.0)


def test_price_curve_monotone(benchmark_params):
    curve = price_curve(benchmark_params)
    assert curve["call"].is_monotonic_increasing
    assert curve["put"].is_monotonic_decreasing


# ── Custom settings ──

def test_price_curve_custom_band(benchmark_params):
    settings = EngineSettings(curve_points=10, curve_low=0.8, curve_high=1.2)
    curve = price_curve(benchmark_params, settings)
    assert len(curve) == 11
    assert curve["spot"].iloc[0] == pytest.approx(80.0)
    assert curve["spot"].iloc[-1] == pytest.approx(120.0)


def test_theta_scales_with_days_per_year(benchmark_params):
    calendar = price_option(benchmark_params)
    trading = price_option(benchmark_params, EngineSettings(days_per_year=252))
    assert trading.theta == pytest.approx(calendar.theta * 365 / 252)
    assert trading.call_price == calendar.call_price
