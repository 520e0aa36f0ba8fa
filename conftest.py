"""
Shared fixtures: a small city table around a reference city with 1400 mm of
annual rainfall, plus the packaged coefficient table
"""

import pytest

from varsha_core.config.settings import DATA_DIR, COEFFICIENTS_FILE
from varsha_core.data_sources import CityRecord, ReferenceData, ReferenceDataStore
from varsha_core.engine import CalculationEngine
from varsha_core.models.site import BorewellInfo, RainwaterInput, RechargeInput

FIXTURE_CITIES = [
    {
        "city": "Raincity", "state": "Testland", "pincode": "560001",
        "monthlyRainfall": [10, 10, 15, 40, 100, 190, 300, 280, 200, 160, 70, 25],
        "annualRainfall": 1400, "groundwaterDepth": 10,
        "aquiferType": "Hard Rock", "region": "South",
    },
    {
        "city": "Delhi", "state": "Delhi", "pincode": "110001",
        "monthlyRainfall": [19, 20, 15, 10, 25, 70, 210, 230, 120, 15, 5, 8],
        "annualRainfall": 747, "groundwaterDepth": 20,
        "aquiferType": "Alluvial", "region": "North",
    },
    {
        "city": "Drytown", "state": "Rajasthan", "pincode": "342001",
        "monthlyRainfall": [2, 2, 2, 3, 10, 35, 120, 130, 45, 5, 3, 3],
        "annualRainfall": 360, "groundwaterDepth": 40,
        "aquiferType": "Desert", "region": "West",
    },
]


@pytest.fixture(scope="session")
def coefficients():
    return ReferenceDataStore.load_coefficients(DATA_DIR / COEFFICIENTS_FILE)


@pytest.fixture(scope="session")
def cities():
    return tuple(CityRecord.from_dict(entry) for entry in FIXTURE_CITIES)


@pytest.fixture(scope="session")
def raincity(cities):
    return cities[0]


@pytest.fixture(scope="session")
def drytown(cities):
    return cities[2]


@pytest.fixture(scope="session")
def reference_data(cities, coefficients):
    return ReferenceData(cities=cities, coefficients=coefficients)


@pytest.fixture
def engine(reference_data):
    return CalculationEngine(reference_data)


@pytest.fixture
def rainwater_site():
    """Scenario A site: 150 m2 RCC roof, 4 dwellers, Raincity pincode"""
    return RainwaterInput(
        name="Asha Residency",
        location="Raincity",
        pincode="560034",
        soil_type="Sandy",
        groundwater_depth=10,
        budget="Medium",
        has_open_space=False,
        roof_area=150,
        roof_type="RCC",
        environment="Residential",
        bird_nesting=False,
        dwellers=4,
        purpose="Domestic",
    )


@pytest.fixture
def recharge_site():
    return RechargeInput(
        name="Green Acres Farm",
        location="Raincity",
        pincode="560034",
        soil_type="Loamy",
        groundwater_depth=10,
        budget="Medium",
        has_open_space=True,
        open_space_area=100,
        catchment_area=200,
        catchment_type="Rooftop",
        borewell=BorewellInfo(has_borewell=True, count=1, depth=45, condition="Dead"),
    )
