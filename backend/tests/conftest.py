import pytest

from schemas import Category, MaintenanceType, RoadAsset


def make_asset(id, condition, length=1.0, surface_type="Asphalt"):
    return RoadAsset(id=id, condition=condition, length=length, surface_type=surface_type)


@pytest.fixture
def three_assets():
    return [make_asset(1, 40), make_asset(2, 70), make_asset(3, 90)]


@pytest.fixture
def overlay():
    return MaintenanceType(
        id=1,
        name="Mill and Overlay",
        cost_per_mile=10_000,
        condition_improvement=20,
        applicable_min_condition=30,
        applicable_max_condition=60,
        category=Category.PREVENTIVE_MAINTENANCE,
    )


@pytest.fixture
def mixed_preventive_types():
    """Two preventive treatments covering the low and high condition bands"""
    return [
        MaintenanceType(
            id=10, name="Patching", cost_per_mile=15_000, condition_improvement=30,
            applicable_min_condition=0, applicable_max_condition=49,
            category=Category.PREVENTIVE_MAINTENANCE,
        ),
        MaintenanceType(
            id=11, name="Crack Seal", cost_per_mile=1_000, condition_improvement=10,
            applicable_min_condition=50, applicable_max_condition=100,
            category=Category.PREVENTIVE_MAINTENANCE,
        ),
    ]
