from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Budget categories, listed in processing order (least to most invasive)"""
    PREVENTIVE_MAINTENANCE = "preventive_maintenance"
    MINOR_REHABILITATION = "minor_rehabilitation"
    MAJOR_REHABILITATION = "major_rehabilitation"
    RECONSTRUCTION = "reconstruction"


CATEGORY_ORDER = [
    Category.PREVENTIVE_MAINTENANCE,
    Category.MINOR_REHABILITATION,
    Category.MAJOR_REHABILITATION,
    Category.RECONSTRUCTION,
]


class OptimizationMethod(str, Enum):
    IMPACT = "impact"    # biggest condition gain first
    COST = "cost"        # cheapest treatment first
    BENEFIT = "benefit"  # best gain per dollar first


class RoadAsset(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    condition: int = Field(ge=0, le=100)  # PCI
    length: float  # miles
    surface_type: str
    name: Optional[str] = None
    asset_id: Optional[str] = None  # e.g. RS-1024


class MaintenanceType(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    cost_per_mile: float
    condition_improvement: int
    applicable_min_condition: Optional[int] = None
    applicable_max_condition: Optional[int] = None
    lifespan_extension: Optional[int] = None  # years
    category: Optional[Category] = None

    def applies_to(self, condition: float) -> bool:
        if self.applicable_min_condition is not None and condition < self.applicable_min_condition:
            return False
        if self.applicable_max_condition is not None and condition > self.applicable_max_condition:
            return False
        return True


class BudgetSplit(BaseModel):
    preventive_maintenance: float = Field(0, ge=0)
    minor_rehabilitation: float = Field(0, ge=0)
    major_rehabilitation: float = Field(0, ge=0)
    reconstruction: float = Field(0, ge=0)

    def amount_for(self, category: Category) -> float:
        return getattr(self, category.value)

    @property
    def total(self) -> float:
        return sum(self.amount_for(c) for c in CATEGORY_ORDER)


class BudgetAllocation(BaseModel):
    """Stored allocation record as handed over by the persistence layer"""
    model_config = ConfigDict(from_attributes=True)

    name: str
    fiscal_year: int
    total_budget: float
    preventive_maintenance: float = Field(0, ge=0)
    minor_rehabilitation: float = Field(0, ge=0)
    major_rehabilitation: float = Field(0, ge=0)
    reconstruction: float = Field(0, ge=0)
    description: Optional[str] = None
    active: bool = False

    def to_split(self) -> BudgetSplit:
        return BudgetSplit(
            preventive_maintenance=self.preventive_maintenance,
            minor_rehabilitation=self.minor_rehabilitation,
            major_rehabilitation=self.major_rehabilitation,
            reconstruction=self.reconstruction,
        )


class TreatmentAssignment(BaseModel):
    asset_id: int
    maintenance_type_id: int
    maintenance_type_name: str
    category: Category
    cost: float
    condition_before: int
    condition_after: int


class ImpactResult(BaseModel):
    projected_pci: Optional[int] = None  # None when there are no assets
    improved_assets: int = 0
    unaddressed_assets: int = 0
    total_cost: float = 0
    treatments: List[TreatmentAssignment] = []


class BudgetScenario(BaseModel):
    name: str
    method: OptimizationMethod
    total_budget: float
    split: BudgetSplit
    impact: ImpactResult
