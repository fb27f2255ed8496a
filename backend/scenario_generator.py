"""
Budget Scenario Generator

Splits a single total budget into a fixed set of named scenarios and
projects each one through the impact calculator so they can be compared
side by side. Scenario order is stable; callers select by index.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from optimizer import calculate_budget_impact
from schemas import (
    CATEGORY_ORDER,
    BudgetScenario,
    BudgetSplit,
    Category,
    MaintenanceType,
    OptimizationMethod,
    RoadAsset,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioDefinition:
    name: str
    method: OptimizationMethod
    weights: Dict[Category, float]  # share of the total budget per category


def _weights(preventive: float, minor: float, major: float, reconstruction: float) -> Dict[Category, float]:
    return dict(zip(CATEGORY_ORDER, (preventive, minor, major, reconstruction)))


SCENARIO_DEFINITIONS: List[ScenarioDefinition] = [
    # Default split suggested on the planning screen
    ScenarioDefinition("Current Allocation", OptimizationMethod.BENEFIT, _weights(0.33, 0.26, 0.21, 0.20)),
    # Worst roads first
    ScenarioDefinition("Condition-Driven", OptimizationMethod.IMPACT, _weights(0.15, 0.20, 0.30, 0.35)),
    # Touch as many roads as possible
    ScenarioDefinition("Cost-Efficient", OptimizationMethod.COST, _weights(0.40, 0.30, 0.20, 0.10)),
    ScenarioDefinition("Balanced", OptimizationMethod.BENEFIT, _weights(0.25, 0.25, 0.25, 0.25)),
]


def split_budget(total_budget: float, weights: Dict[Category, float]) -> BudgetSplit:
    return BudgetSplit(**{
        category.value: total_budget * weights.get(category, 0)
        for category in CATEGORY_ORDER
    })


def generate_budget_scenarios(
    total_budget: float,
    road_assets: Sequence[RoadAsset],
    maintenance_types: Sequence[MaintenanceType],
) -> List[BudgetScenario]:
    """
    Build every scenario in SCENARIO_DEFINITIONS for the given total budget.

    Each scenario's impact comes from calculate_budget_impact, so a scenario
    and a manual calculation with the same split and method always agree.
    """
    scenarios = []
    for definition in SCENARIO_DEFINITIONS:
        split = split_budget(total_budget, definition.weights)
        impact = calculate_budget_impact(road_assets, maintenance_types, split, definition.method)
        logger.info(
            "Scenario %s (%s): PCI %s, %d assets improved",
            definition.name, definition.method.value, impact.projected_pci, impact.improved_assets,
        )
        scenarios.append(BudgetScenario(
            name=definition.name,
            method=definition.method,
            total_budget=total_budget,
            split=split,
            impact=impact,
        ))
    return scenarios
