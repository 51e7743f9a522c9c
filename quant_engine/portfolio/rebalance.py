"""
Drift rebalancing: compare each asset's current value with its target
share of the portfolio and emit BUY / SELL / HOLD actions.

Allocation totals are validated softly. Actions are always computed from
whatever targets are given and ``is_valid`` reports whether they summed to
100%, leaving it to the caller to gate on it.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Sequence

import pandas as pd

from quant_engine.config import DEFAULT_SETTINGS, EngineSettings
from quant_engine.errors import require_non_negative

logger = logging.getLogger(__name__)


class Action(Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass
class Asset:
    id: str
    name: str
    current_value: float = 0.0
    target_allocation: float = 0.0   # percent of portfolio


@dataclass(frozen=True)
class RebalanceAction:
    asset: Asset                     # copy taken when the report was built
    target_value: float
    delta: float                     # target_value - current_value
    action: Action


@dataclass
class RebalanceReport:
    total_value: float
    total_allocation: float
    is_valid: bool
    actions: List[RebalanceAction] = field(default_factory=list)

    @property
    def actionable(self) -> List[RebalanceAction]:
        return [a for a in self.actions if a.action is not Action.HOLD]

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                "id": a.asset.id,
                "name": a.asset.name,
                "current_value": a.asset.current_value,
                "target_allocation": a.asset.target_allocation,
                "target_value": a.target_value,
                "delta": a.delta,
                "action": a.action.value,
            }
            for a in self.actions
        ]
        return pd.DataFrame(rows, columns=[
            "id", "name", "current_value", "target_allocation",
            "target_value", "delta", "action",
        ])


def _classify(delta: float, threshold: float) -> Action:
    if delta > threshold:
        return Action.BUY
    if delta < -threshold:
        return Action.SELL
    return Action.HOLD


def rebalance_portfolio(
    assets: Sequence[Asset],
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> RebalanceReport:
    """Per-asset drift against target allocation. Reads ``assets`` only."""
    for asset in assets:
        require_non_negative(f"current_value[{asset.id}]", asset.current_value or 0.0)

    total_value = sum(a.current_value or 0.0 for a in assets)
    total_allocation = sum(a.target_allocation or 0.0 for a in assets)
    is_valid = abs(total_allocation - 100.0) < settings.allocation_tolerance
    if not is_valid:
        logger.warning(
            "Target allocations sum to %.2f%%, not 100%%; actions computed anyway",
            total_allocation,
        )

    actions = []
    for asset in assets:
        target_value = total_value * (asset.target_allocation or 0.0) / 100.0
        delta = target_value - (asset.current_value or 0.0)
        actions.append(RebalanceAction(
            asset=replace(asset),
            target_value=target_value,
            delta=delta,
            action=_classify(delta, settings.rebalance_threshold),
        ))

    report = RebalanceReport(
        total_value=total_value,
        total_allocation=total_allocation,
        is_valid=is_valid,
        actions=actions,
    )
    logger.debug(
        "Rebalance: %d assets, total=%.2f, %d actionable",
        len(actions), total_value, len(report.actionable),
    )
    return report


def allocation_breakdown(report: RebalanceReport) -> pd.DataFrame:
    """
    Current vs target value per asset, for pie/bar charts.

    Rows with neither a current nor a target value are dropped and blank
    names are labelled ``Unnamed``.
    """
    rows = []
    for a in report.actions:
        current = a.asset.current_value or 0.0
        target = a.target_value if report.total_value > 0 else 0.0
        if current <= 0 and target <= 0:
            continue
        rows.append({
            "name": a.asset.name or "Unnamed",
            "current_value": current,
            "target_value": target,
        })
    return pd.DataFrame(rows, columns=["name", "current_value", "target_value"])
