"""Target-allocation drift rebalancing."""
from .rebalance import (
    Action,
    Asset,
    RebalanceAction,
    RebalanceReport,
    allocation_breakdown,
    rebalance_portfolio,
)
