"""Closed-form European option pricing."""
from .black_scholes import (
    BlackScholesResult,
    OptionParameters,
    black_scholes,
    norm_cdf,
    norm_pdf,
    price_curve,
    price_option,
)
