"""
REFERENCE DATA SOURCES
Immutable city rainfall and coefficient tables used by the calculation engine
Loaded once at process start, read-only thereafter
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from varsha_core.config.settings import (
    DATA_DIR, CITIES_FILE, COEFFICIENTS_FILE, MONTH_NAMES,
    ROOF_TYPES, SOIL_TYPES, BUDGET_TIERS, ENVIRONMENTS, PURPOSES,
    CLIMATIC_REGIONS, AQUIFER_TYPES
)
from varsha_core.utils.core import ReferenceDataError

logger = logging.getLogger(__name__)


def _frozen(mapping: Dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class CityRecord:
    """One city's rainfall and groundwater metadata"""
    city: str
    state: str
    pincode: str
    monthly_rainfall: Tuple[float, ...]  # mm, Jan-Dec
    annual_rainfall: float  # mm, sum of monthly_rainfall
    groundwater_depth: float  # meters
    aquifer_type: str
    region: str

    @property
    def pincode_prefix(self) -> str:
        return self.pincode[:3]

    @property
    def monsoon_share(self) -> float:
        """Fraction of annual rainfall falling in Jun-Sep"""
        if self.annual_rainfall <= 0:
            return 0.0
        return float(sum(self.monthly_rainfall[5:9]) / self.annual_rainfall)

    @classmethod
    def from_dict(cls, data: Dict) -> 'CityRecord':
        monthly = tuple(float(v) for v in data['monthlyRainfall'])
        if len(monthly) != 12:
            raise ReferenceDataError(
                f"City {data.get('city')!r} has {len(monthly)} monthly rainfall values, expected 12"
            )
        if any(v < 0 for v in monthly):
            raise ReferenceDataError(f"City {data.get('city')!r} has negative rainfall")
        if data['region'] not in CLIMATIC_REGIONS:
            raise ReferenceDataError(f"City {data.get('city')!r} has unknown region {data['region']!r}")
        if data['aquiferType'] not in AQUIFER_TYPES:
            raise ReferenceDataError(f"City {data.get('city')!r} has unknown aquifer {data['aquiferType']!r}")

        annual = float(data.get('annualRainfall', sum(monthly)))
        if not np.isclose(annual, sum(monthly)):
            logger.warning(
                f"{data['city']}: annual rainfall {annual:.0f}mm differs from monthly sum "
                f"{sum(monthly):.0f}mm - using monthly sum"
            )
            annual = float(sum(monthly))

        return cls(
            city=str(data['city']),
            state=str(data['state']),
            pincode=str(data['pincode']),
            monthly_rainfall=monthly,
            annual_rainfall=annual,
            groundwater_depth=float(data['groundwaterDepth']),
            aquifer_type=data['aquiferType'],
            region=data['region'],
        )


@dataclass(frozen=True)
class CoefficientTable:
    """Runoff, infiltration, cost and adjustment factors"""
    runoff_coefficients: Mapping[str, float]
    infiltration_rates: Mapping[str, float]  # mm/hour
    base_cost_per_sqm: float
    budget_multipliers: Mapping[str, float]
    municipal_rate: float  # rupees per liter
    domestic_consumption: float  # liters per person per day
    evaporation_loss: Mapping[str, float]
    environment_quality: Mapping[str, float]
    bird_nesting_factor: float
    seasonal_variation: Mapping[str, float]
    seasonal_demand_multipliers: Mapping[str, Tuple[float, ...]]
    maintenance_costs: Mapping[str, float]
    lifecycle_factors: Mapping[str, float]

    @classmethod
    def from_dict(cls, data: Dict) -> 'CoefficientTable':
        advanced = data['advancedFactors']
        quality = advanced['qualityFactors']

        demand_multipliers = {}
        for purpose, values in advanced['seasonalDemandMultipliers'].items():
            if len(values) != 12:
                raise ReferenceDataError(
                    f"Demand multipliers for {purpose!r} have {len(values)} values, expected 12"
                )
            demand_multipliers[purpose] = tuple(float(v) for v in values)

        table = cls(
            runoff_coefficients=_frozen(data['runoffCoefficients']),
            infiltration_rates=_frozen(data['infiltrationRates']),
            base_cost_per_sqm=float(data['costFactors']['baseCostPerSqm']),
            budget_multipliers=_frozen(data['costFactors']['budgetMultipliers']),
            municipal_rate=float(data['waterRates']['municipalRate']),
            domestic_consumption=float(data['waterRates']['domesticConsumption']),
            evaporation_loss=_frozen(advanced['evaporationLoss']),
            environment_quality=_frozen(quality['environment']),
            bird_nesting_factor=float(quality['birdNesting']),
            seasonal_variation=_frozen(advanced['seasonalVariation']),
            seasonal_demand_multipliers=_frozen(demand_multipliers),
            maintenance_costs=_frozen(advanced['maintenanceCosts']),
            lifecycle_factors=_frozen(advanced['lifeCycleFactors']),
        )
        table._check_complete()
        return table

    def _check_complete(self) -> None:
        """Every categorical input must have a coefficient"""
        required = [
            ('runoffCoefficients', self.runoff_coefficients, ROOF_TYPES),
            ('infiltrationRates', self.infiltration_rates, SOIL_TYPES),
            ('budgetMultipliers', self.budget_multipliers, BUDGET_TIERS),
            ('evaporationLoss', self.evaporation_loss, CLIMATIC_REGIONS),
            ('qualityFactors.environment', self.environment_quality, ENVIRONMENTS),
            ('seasonalDemandMultipliers', self.seasonal_demand_multipliers, PURPOSES),
            ('seasonalVariation', self.seasonal_variation,
             ('premonsoon', 'monsoon', 'postmonsoon', 'winter')),
            ('maintenanceCosts', self.maintenance_costs, ('annual',)),
            ('lifeCycleFactors', self.lifecycle_factors, ('system_life',)),
        ]
        for name, table, keys in required:
            missing = [k for k in keys if k not in table]
            if missing:
                raise ReferenceDataError(f"Coefficient table {name} missing keys: {missing}")


@dataclass(frozen=True)
class ReferenceData:
    """City list plus coefficient table, injected into the engine"""
    cities: Tuple[CityRecord, ...]
    coefficients: CoefficientTable

    def __post_init__(self):
        if not self.cities:
            raise ReferenceDataError("City reference table is empty")

    def find_city(self, name: str) -> Optional[CityRecord]:
        for record in self.cities:
            if record.city == name:
                return record
        return None

    def rainfall_frame(self) -> pd.DataFrame:
        """Monthly rainfall table, one row per city"""
        rows = []
        for record in self.cities:
            row = {'city': record.city, 'state': record.state, 'region': record.region}
            row.update(dict(zip(MONTH_NAMES, record.monthly_rainfall)))
            row['annual'] = record.annual_rainfall
            rows.append(row)
        return pd.DataFrame(rows)


class ReferenceDataStore:
    """
    Loads the packaged (or VARSHA_DATA_DIR) JSON tables
    Any read or structural failure is a ReferenceDataError - fatal at startup
    """

    @staticmethod
    def _read_json(path: Path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise ReferenceDataError(f"Reference file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise ReferenceDataError(f"Reference file is not valid JSON: {path}: {e}") from e

    @staticmethod
    def load_cities(path: Path) -> Tuple[CityRecord, ...]:
        raw = ReferenceDataStore._read_json(path)
        if not isinstance(raw, list) or not raw:
            raise ReferenceDataError(f"City table {path} is empty or not a list")

        try:
            cities = tuple(CityRecord.from_dict(entry) for entry in raw)
        except (KeyError, TypeError, ValueError) as e:
            raise ReferenceDataError(f"Malformed city record in {path}: {e}") from e

        prefixes = [c.pincode_prefix for c in cities]
        duplicates = sorted({p for p in prefixes if prefixes.count(p) > 1})
        if duplicates:
            logger.warning(f"Duplicate pincode prefixes in city table: {duplicates} - first match wins")

        return cities

    @staticmethod
    def load_coefficients(path: Path) -> CoefficientTable:
        raw = ReferenceDataStore._read_json(path)
        try:
            return CoefficientTable.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise ReferenceDataError(f"Malformed coefficient table {path}: {e}") from e

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> ReferenceData:
        data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

        cities = cls.load_cities(data_dir / CITIES_FILE)
        coefficients = cls.load_coefficients(data_dir / COEFFICIENTS_FILE)

        logger.info(f"Loaded reference data: {len(cities)} cities from {data_dir}")
        return ReferenceData(cities=cities, coefficients=coefficients)
