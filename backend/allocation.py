"""
Helpers for stored budget allocations: default splits, sanity warnings and
chart-ready breakdowns. Nothing here writes persisted state.
"""

from typing import Dict, List, Optional, Sequence

import config
from optimizer import round_half_up
from schemas import CATEGORY_ORDER, BudgetAllocation, BudgetSplit, Category

DEFAULT_SPLIT_WEIGHTS = {
    Category.PREVENTIVE_MAINTENANCE: 0.33,
    Category.MINOR_REHABILITATION: 0.26,
    Category.MAJOR_REHABILITATION: 0.21,
    Category.RECONSTRUCTION: 0.20,
}

CATEGORY_LABELS = {
    Category.PREVENTIVE_MAINTENANCE: "Preventive",
    Category.MINOR_REHABILITATION: "Minor Rehab",
    Category.MAJOR_REHABILITATION: "Major Rehab",
    Category.RECONSTRUCTION: "Reconstruction",
}


def suggest_default_split(total_budget: float) -> BudgetSplit:
    """Default 33/26/21/20 split, rounded to cents"""
    return BudgetSplit(**{
        category.value: round(total_budget * DEFAULT_SPLIT_WEIGHTS[category], 2)
        for category in CATEGORY_ORDER
    })


def allocation_warnings(allocation: BudgetAllocation, tolerance: Optional[float] = None) -> List[str]:
    """
    Problems worth flagging before an allocation is used for planning.
    The allocation is still usable; callers decide whether to block on these.
    """
    if tolerance is None:
        tolerance = config.ALLOCATION_TOLERANCE

    warnings = []
    if allocation.total_budget <= 0:
        warnings.append("Total budget must be positive")

    allocated = allocation.to_split().total
    if abs(allocated - allocation.total_budget) > tolerance:
        warnings.append(
            f"Category allocations (${allocated:,.2f}) do not sum to the "
            f"total budget (${allocation.total_budget:,.2f})"
        )
    return warnings


def category_breakdown(allocation: BudgetAllocation) -> List[Dict]:
    split = allocation.to_split()
    breakdown = []
    for category in CATEGORY_ORDER:
        amount = split.amount_for(category)
        percentage = 0
        if allocation.total_budget > 0:
            percentage = round_half_up(amount / allocation.total_budget * 100)
        breakdown.append({
            "category": category.value,
            "label": CATEGORY_LABELS[category],
            "amount": amount,
            "percentage": percentage,
        })
    return breakdown


def select_active_allocation(allocations: Sequence[BudgetAllocation]) -> Optional[BudgetAllocation]:
    for allocation in allocations:
        if allocation.active:
            return allocation
    return None
