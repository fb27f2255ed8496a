"""
Pavement Deterioration Model

Standard deterioration curve for projecting PCI forward in time:
- Base loss rate by surface type
- Traffic and climate multipliers
- Linear loss for the first 5 years, 80% of the rate after that

Also turns fleet conditions into good/fair/poor/critical distributions so
budget scenarios can be forecast over several years.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence

from optimizer import round_half_up
from schemas import ImpactResult, RoadAsset


class ConditionState(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


# PCI points lost per year at medium traffic and climate
BASE_DETERIORATION_RATES: Dict[str, float] = {
    "Asphalt": 3.0,
    "Concrete": 2.0,
    "Chip Seal": 4.5,
    "Gravel": 6.0,
}
DEFAULT_DETERIORATION_RATE = 3.0

TRAFFIC_FACTORS: Dict[str, float] = {
    "low": 0.85,
    "medium": 1.0,
    "high": 1.2,
}

CLIMATE_FACTORS: Dict[str, float] = {
    "low": 0.9,
    "medium": 1.0,
    "high": 1.15,
}

EARLY_LIFE_YEARS = 5
LATE_LIFE_RATE_FACTOR = 0.8

# Lower bound of each state, best first
CONDITION_THRESHOLDS = [
    (80, ConditionState.GOOD),
    (60, ConditionState.FAIR),
    (40, ConditionState.POOR),
]


def deterioration_rate(surface_type: str, traffic_level: str = "medium", climate_impact: str = "medium") -> float:
    base_rate = BASE_DETERIORATION_RATES.get(surface_type, DEFAULT_DETERIORATION_RATE)
    return base_rate * TRAFFIC_FACTORS[traffic_level] * CLIMATE_FACTORS[climate_impact]


def predict_condition(
    initial_condition: float,
    age_in_years: float,
    surface_type: str,
    traffic_level: str = "medium",
    climate_impact: str = "medium",
) -> float:
    """Condition after age_in_years of wear, never below 0"""
    rate = deterioration_rate(surface_type, traffic_level, climate_impact)

    if age_in_years <= EARLY_LIFE_YEARS:
        loss = rate * age_in_years
    else:
        loss = rate * EARLY_LIFE_YEARS
        loss += rate * LATE_LIFE_RATE_FACTOR * (age_in_years - EARLY_LIFE_YEARS)

    return max(0.0, initial_condition - loss)


def apply_maintenance(condition: float, condition_improvement: float) -> float:
    return min(100, condition + condition_improvement)


def project_condition(
    initial_condition: float,
    surface_type: str,
    years: int,
    traffic_level: str = "medium",
    climate_impact: str = "medium",
    maintenance_schedule: Optional[Dict[int, float]] = None,
) -> List[Dict]:
    """
    Year-by-year condition for one road, starting at year 0.

    Args:
        maintenance_schedule: year -> condition improvement applied at the
            start of that year, before it is recorded
    """
    schedule = maintenance_schedule or {}
    result = []
    condition = initial_condition

    for year in range(years + 1):
        if year in schedule:
            condition = apply_maintenance(condition, schedule[year])

        result.append({"year": year, "condition": condition})

        if year < years:
            condition = predict_condition(condition, 1, surface_type, traffic_level, climate_impact)

    return result


def get_condition_state(condition: float) -> ConditionState:
    for threshold, state in CONDITION_THRESHOLDS:
        if condition >= threshold:
            return state
    return ConditionState.CRITICAL


def get_condition_distribution(conditions: Sequence[float]) -> Dict[str, int]:
    """Rounded percentage of roads in each condition state"""
    distribution = {state.value: 0 for state in ConditionState}
    if not conditions:
        return distribution

    for condition in conditions:
        distribution[get_condition_state(condition).value] += 1

    total = len(conditions)
    return {state: round_half_up(count / total * 100) for state, count in distribution.items()}


def forecast_condition_distribution(
    assets: Sequence[RoadAsset],
    years: int,
    start_year: Optional[int] = None,
    conditions: Optional[Dict[int, float]] = None,
) -> List[Dict]:
    """
    Condition distribution for each year from start_year to start_year + years.

    Args:
        conditions: optional asset id -> starting condition overrides
    """
    if start_year is None:
        start_year = datetime.now().year
    starting = conditions or {}

    forecast = []
    for offset in range(years + 1):
        projected = [
            predict_condition(starting.get(asset.id, asset.condition), offset, asset.surface_type)
            for asset in assets
        ]
        forecast.append({"year": start_year + offset, **get_condition_distribution(projected)})
    return forecast


def forecast_scenario_condition(
    assets: Sequence[RoadAsset],
    impact: ImpactResult,
    years: int,
    start_year: Optional[int] = None,
) -> List[Dict]:
    """Forecast a fleet after the treatments of a calculated impact are applied"""
    treated = {t.asset_id: t.condition_after for t in impact.treatments}
    return forecast_condition_distribution(assets, years, start_year=start_year, conditions=treated)
