"""
Pure-Python Black-Scholes-Merton pricing and Greeks (no scipy dependency).

Prices a European call/put pair on a non-dividend-paying underlying.
Greeks follow desk conventions: theta per calendar day, vega and rho per
one percentage point move in volatility and rate.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

from quant_engine.config import DEFAULT_SETTINGS, EngineSettings
from quant_engine.errors import require_finite, require_positive

logger = logging.getLogger(__name__)

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def norm_cdf(x: float) -> float:
    """Standard normal CDF via Abramowitz & Stegun (7.1.26). Max err ~1.5e-7."""
    a1, a2, a3, a4, a5 = (
        0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429,
    )
    p = 0.3275911
    sign = 1.0 if x >= 0 else -1.0
    # erf(z) with z = |x| / sqrt(2)
    z = abs(x) / math.sqrt(2.0)
    t = 1.0 / (1.0 + p * z)
    y = 1.0 - (((((a5 * t + a4) * t) + a3) * t + a2) * t + a1) * t * math.exp(
        -z * z
    )
    return 0.5 * (1.0 + sign * y)


def norm_pdf(x: float) -> float:
    return math.exp(-0.5 * x * x) * _INV_SQRT_2PI


@dataclass(frozen=True)
class OptionParameters:
    spot: float          # S
    strike: float        # K
    expiry: float        # T, years
    rate: float          # r, annualized decimal
    volatility: float    # sigma, annualized decimal

    def __post_init__(self):
        # sigma * sqrt(T) is a divisor in d1 and gamma
        require_positive("spot", self.spot)
        require_positive("strike", self.strike)
        require_positive("expiry", self.expiry)
        require_finite("rate", self.rate)
        require_positive("volatility", self.volatility)


@dataclass(frozen=True)
class BlackScholesResult:
    call_price: float
    put_price: float
    delta: float
    gamma: float
    theta: float         # per calendar day
    vega: float          # per 1% vol
    rho: float           # per 1% rate
    put_delta: float
    put_theta: float
    put_rho: float
    d1: float
    d2: float


def price_option(
    params: OptionParameters,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> BlackScholesResult:
    """Closed-form call and put prices plus Greeks for one parameter set."""
    S, K, T = params.spot, params.strike, params.expiry
    r, sigma = params.rate, params.volatility

    sqrt_t = math.sqrt(T)
    vol_sqrt_t = sigma * sqrt_t
    d1 = (math.log(S / K) + (r + 0.5 * sigma**2) * T) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t

    n_d1 = norm_cdf(d1)
    n_d2 = norm_cdf(d2)
    n_md1 = norm_cdf(-d1)
    n_md2 = norm_cdf(-d2)
    pdf_d1 = norm_pdf(d1)
    discounted_strike = K * math.exp(-r * T)

    call_price = S * n_d1 - discounted_strike * n_d2
    put_price = discounted_strike * n_md2 - S * n_md1

    time_decay = -(S * pdf_d1 * sigma) / (2.0 * sqrt_t)
    days = settings.days_per_year

    result = BlackScholesResult(
        call_price=call_price,
        put_price=put_price,
        delta=n_d1,
        gamma=pdf_d1 / (S * vol_sqrt_t),
        theta=(time_decay - r * discounted_strike * n_d2) / days,
        vega=S * pdf_d1 * sqrt_t / 100.0,
        rho=T * discounted_strike * n_d2 / 100.0,
        put_delta=n_d1 - 1.0,
        put_theta=(time_decay + r * discounted_strike * n_md2) / days,
        put_rho=-T * discounted_strike * n_md2 / 100.0,
        d1=d1,
        d2=d2,
    )
    logger.debug(
        "BSM S=%.4f K=%.4f T=%.4f r=%.4f sigma=%.4f -> call=%.6f put=%.6f",
        S, K, T, r, sigma, call_price, put_price,
    )
    return result


def black_scholes(S: float, K: float, T: float, r: float, sigma: float) -> BlackScholesResult:
    """Shorthand for ``price_option(OptionParameters(S, K, T, r, sigma))``."""
    return price_option(OptionParameters(S, K, T, r, sigma))


def price_curve(
    params: OptionParameters,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> pd.DataFrame:
    """
    Call and put value across a band of spot prices around ``params.spot``.

    Strike, expiry, rate and vol are held fixed. Returns columns
    ``spot``, ``call``, ``put`` with ``curve_points + 1`` rows.
    """
    spots = np.linspace(
        params.spot * settings.curve_low,
        params.spot * settings.curve_high,
        settings.curve_points + 1,
    )
    rows = []
    for s in spots:
        bs = price_option(
            OptionParameters(
                spot=float(s),
                strike=params.strike,
                expiry=params.expiry,
                rate=params.rate,
                volatility=params.volatility,
            ),
            settings,
        )
        rows.append({"spot": float(s), "call": bs.call_price, "put": bs.put_price})
    return pd.DataFrame(rows, columns=["spot", "call", "put"])
