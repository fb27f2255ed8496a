"""
Budget Impact Calculator

Spends a four-way budget split on a road fleet and projects the resulting
average PCI.

Algorithm (per category, in CATEGORY_ORDER):
1. Pair each untreated asset with every treatment whose range covers it
2. Rank the pairs by the chosen optimization method
3. Fund pairs greedily, skipping assets already funded, until the
   category's sub-budget runs out

Sub-budgets never pool, and an asset is treated at most once per call.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

import config
from schemas import (
    CATEGORY_ORDER,
    BudgetSplit,
    Category,
    ImpactResult,
    MaintenanceType,
    OptimizationMethod,
    RoadAsset,
    TreatmentAssignment,
)

logger = logging.getLogger(__name__)


@dataclass
class TreatmentCandidate:
    """An untreated asset paired with one treatment it could get in a category"""
    index: int  # position in the caller's asset list
    type_position: int  # position of the type within its category
    asset: RoadAsset
    maintenance_type: MaintenanceType
    condition: int
    cost: float
    improvement_per_dollar: float


def categorize(maintenance_type: MaintenanceType) -> Category:
    """
    Budget category for a maintenance type.

    An explicit category always wins. Untagged types fall into a band by
    condition improvement: <=10 preventive, <=20 minor rehab, <90 major
    rehab, otherwise reconstruction.
    """
    if maintenance_type.category is not None:
        return maintenance_type.category

    improvement = maintenance_type.condition_improvement
    if improvement <= 10:
        return Category.PREVENTIVE_MAINTENANCE
    elif improvement <= 20:
        return Category.MINOR_REHABILITATION
    elif improvement < 90:
        return Category.MAJOR_REHABILITATION
    return Category.RECONSTRUCTION


def group_by_category(maintenance_types: Sequence[MaintenanceType]) -> Dict[Category, List[MaintenanceType]]:
    groups: Dict[Category, List[MaintenanceType]] = {}
    for maintenance_type in maintenance_types:
        groups.setdefault(categorize(maintenance_type), []).append(maintenance_type)
    return groups


def _improvement_per_dollar(improvement: float, cost: float) -> float:
    # Zero-cost treatments rank as infinitely good (or NaN for zero gain)
    if cost == 0:
        if improvement == 0 or math.isnan(improvement):
            return math.nan
        return math.copysign(math.inf, improvement)
    return improvement / cost


def _nan_last(value: float) -> float:
    return math.inf if math.isnan(value) else value


def _impact_key(candidate: TreatmentCandidate):
    return (-candidate.maintenance_type.condition_improvement, candidate.asset.id, candidate.type_position)


def _cost_key(candidate: TreatmentCandidate):
    return (_nan_last(candidate.cost), candidate.asset.id, candidate.type_position)


def _benefit_key(candidate: TreatmentCandidate):
    return (_nan_last(-candidate.improvement_per_dollar), candidate.asset.id, candidate.type_position)


# Ties fall back to ascending asset id, then to type input order
RANKING_KEYS = {
    OptimizationMethod.IMPACT: _impact_key,
    OptimizationMethod.COST: _cost_key,
    OptimizationMethod.BENEFIT: _benefit_key,
}


def find_candidates(
    road_assets: Sequence[RoadAsset],
    conditions: List[int],
    treated: List[bool],
    maintenance_types: Sequence[MaintenanceType],
) -> List[TreatmentCandidate]:
    """One candidate per (untreated asset, applicable type) pair"""
    candidates = []
    for index, asset in enumerate(road_assets):
        if treated[index]:
            continue
        condition = conditions[index]
        for type_position, maintenance_type in enumerate(maintenance_types):
            if not maintenance_type.applies_to(condition):
                continue
            cost = maintenance_type.cost_per_mile * asset.length
            candidates.append(TreatmentCandidate(
                index=index,
                type_position=type_position,
                asset=asset,
                maintenance_type=maintenance_type,
                condition=condition,
                cost=cost,
                improvement_per_dollar=_improvement_per_dollar(
                    maintenance_type.condition_improvement, cost
                ),
            ))
    return candidates


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_budget_impact(
    road_assets: Sequence[RoadAsset],
    maintenance_types: Sequence[MaintenanceType],
    budget_split: BudgetSplit,
    method: Union[OptimizationMethod, str, None] = None,
) -> ImpactResult:
    """
    Spend a budget split on the fleet and project the average condition.

    Inputs are never modified; conditions are tracked in a private list.
    Costs and lengths are trusted as given, so NaN or negative values flow
    through the arithmetic instead of raising.

    Args:
        road_assets: Fleet to treat (may be empty)
        maintenance_types: Available treatments; a category with no type is skipped
        budget_split: Sub-budget per category
        method: impact, cost or benefit (defaults to DEFAULT_OPTIMIZATION_METHOD)

    Returns:
        ImpactResult with the projected PCI (None for an empty fleet),
        treated/untreated counts, total spend and the individual treatments
    """
    method = OptimizationMethod(method or config.DEFAULT_OPTIMIZATION_METHOD)
    types_by_category = group_by_category(maintenance_types)

    conditions = [asset.condition for asset in road_assets]
    treated = [False] * len(road_assets)
    treatments: List[TreatmentAssignment] = []
    total_cost = 0.0

    for category in CATEGORY_ORDER:
        budget = budget_split.amount_for(category)
        category_types = types_by_category.get(category)
        if budget <= 0 or not category_types:
            continue

        candidates = find_candidates(road_assets, conditions, treated, category_types)
        candidates.sort(key=RANKING_KEYS[method])

        remaining_budget = budget
        for candidate in candidates:
            # An asset keeps the first treatment it is funded for
            if treated[candidate.index]:
                continue
            if remaining_budget >= candidate.cost:
                new_condition = min(100, candidate.condition + candidate.maintenance_type.condition_improvement)
                conditions[candidate.index] = new_condition
                treated[candidate.index] = True
                remaining_budget -= candidate.cost
                total_cost += candidate.cost
                treatments.append(TreatmentAssignment(
                    asset_id=candidate.asset.id,
                    maintenance_type_id=candidate.maintenance_type.id,
                    maintenance_type_name=candidate.maintenance_type.name,
                    category=category,
                    cost=candidate.cost,
                    condition_before=candidate.condition,
                    condition_after=new_condition,
                ))

        logger.debug(
            "%s: %d candidates, spent $%.2f of $%.2f",
            category.value, len(candidates), budget - remaining_budget, budget,
        )

    improved_assets = sum(treated)
    projected_pci: Optional[int] = None
    if conditions:
        projected_pci = round_half_up(sum(conditions) / len(conditions))

    return ImpactResult(
        projected_pci=projected_pci,
        improved_assets=improved_assets,
        unaddressed_assets=len(road_assets) - improved_assets,
        total_cost=total_cost,
        treatments=treatments,
    )


def compare_optimization_methods(
    road_assets: Sequence[RoadAsset],
    maintenance_types: Sequence[MaintenanceType],
    budget_split: BudgetSplit,
) -> Dict[OptimizationMethod, ImpactResult]:
    """Run every optimization method against the same split"""
    return {
        method: calculate_budget_impact(road_assets, maintenance_types, budget_split, method)
        for method in OptimizationMethod
    }
