"""
Result containers produced by the calculation pipeline
All containers are frozen - no stage mutates another stage's output
"""

import json
from dataclasses import dataclass, asdict
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class MonthlyPotential:
    """Annual and monthly capture volume in liters"""
    annual: int
    monthly: Tuple[int, ...]


@dataclass(frozen=True)
class TankDimensions:
    diameter: float  # meters
    height: float  # meters


@dataclass(frozen=True)
class TankSizing:
    capacity: int  # liters
    dimensions: TankDimensions
    dry_period_deficit: int  # liters
    monsoon_surplus: int  # liters


@dataclass(frozen=True)
class PitDimensions:
    length: int  # meters
    width: int  # meters
    depth: float  # meters


@dataclass(frozen=True)
class TrenchDimensions:
    width: float  # meters
    depth: float  # meters
    length: float  # meters per trench
    count: int
    total_length: float  # meters


@dataclass(frozen=True)
class BorewellRecharge:
    capacity_lph: int  # liters per hour per borewell
    total_capacity_lph: int  # all borewells on site
    depth_factor: float
    condition_factor: float


@dataclass(frozen=True)
class BorewellRejuvenation:
    recommended: bool
    condition: str
    method: str
    expected_improvement: str


@dataclass(frozen=True)
class RechargeSizing:
    recharge_volume: int  # m3 per year
    pit_dimensions: PitDimensions
    trench_dimensions: Optional[TrenchDimensions]
    borewell_recharge: Optional[BorewellRecharge]
    borewell_rejuvenation: Optional[BorewellRejuvenation]


@dataclass(frozen=True)
class SystemCost:
    low: int
    medium: int
    high: int


@dataclass(frozen=True)
class CostEstimate:
    system_cost: SystemCost
    annual_savings: int  # rupees; 0 for recharge
    payback_period: int  # years
    life_cycle_cost: int  # rupees
    maintenance_cost: int  # rupees per year
    system_efficiency: Optional[float] = None  # rainwater only
    groundwater_value: Optional[int] = None  # recharge only, rupees per year


@dataclass(frozen=True)
class FeasibilityAssessment:
    score: int  # 0-100
    level: str  # High / Medium / Low
    recommendations: Tuple[str, ...]
    warnings: Tuple[str, ...]


@dataclass(frozen=True)
class CalculationResult:
    """Fields shared by both calculation modes"""
    city: str
    rainwater_potential: int  # liters per year
    monthly_potential: Tuple[int, ...]
    system_cost: SystemCost
    payback_period: int
    life_cycle_cost: int
    maintenance_cost: int
    feasibility_score: int
    feasibility_level: str
    recommendations: Tuple[str, ...]
    warnings: Tuple[str, ...]

    calculation_type = None

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['calculation_type'] = self.calculation_type
        data['monthly_potential'] = list(self.monthly_potential)
        data['recommendations'] = list(self.recommendations)
        data['warnings'] = list(self.warnings)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)


@dataclass(frozen=True)
class RainwaterResults(CalculationResult):
    household_demand: int = 0  # liters per year
    coverage_percentage: int = 0  # 0-100
    first_flush: int = 0  # liters
    tank_capacity: int = 0  # liters
    tank_dimensions: Optional[TankDimensions] = None
    annual_savings: int = 0  # rupees

    calculation_type = 'rainwater'


@dataclass(frozen=True)
class RechargeResults(CalculationResult):
    recharge_volume: int = 0  # m3 per year
    pit_dimensions: Optional[PitDimensions] = None
    trench_dimensions: Optional[TrenchDimensions] = None
    borewell_recharge: Optional[BorewellRecharge] = None
    borewell_rejuvenation: Optional[BorewellRejuvenation] = None
    groundwater_benefit: int = 0  # m3 per year

    calculation_type = 'recharge'
