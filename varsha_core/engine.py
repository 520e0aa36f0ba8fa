"""
CALCULATION ENGINE
Runs the fixed pipeline for one site:
resolve city -> potential -> demand (rainwater only) -> sizing -> cost -> feasibility

The engine holds only read-only reference data. Every call is independent,
so one engine can serve parallel requests.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from varsha_core.config.settings import CALCULATION_MODES, MODE_RAINWATER
from varsha_core.data_sources import ReferenceData, ReferenceDataStore
from varsha_core.models.site import RainwaterInput, RechargeInput, validate_site_input
from varsha_core.models.site_resolver import SiteResolver
from varsha_core.models.potential import PotentialEstimator
from varsha_core.models.demand import DemandEstimator
from varsha_core.models.storage import TankSizer
from varsha_core.models.recharge import RechargeStructureSizer
from varsha_core.models.cost import CostModel
from varsha_core.models.feasibility import FeasibilityScorer
from varsha_core.models.results import CalculationResult, RainwaterResults, RechargeResults
from varsha_core.utils.core import InputValidationError, ensure_finite, round_half_up

logger = logging.getLogger(__name__)


class CalculationEngine:
    """
    Facade over the pipeline stages
    Reference data is injected so tests can substitute fixture tables
    """

    def __init__(self, reference_data: ReferenceData):
        self.logger = logging.getLogger(__name__)
        self.reference_data = reference_data

        coefficients = reference_data.coefficients
        self.resolver = SiteResolver(reference_data.cities)
        self.potential_estimator = PotentialEstimator(coefficients)
        self.demand_estimator = DemandEstimator(coefficients)
        self.tank_sizer = TankSizer()
        self.recharge_sizer = RechargeStructureSizer(coefficients)
        self.cost_model = CostModel(coefficients)
        self.feasibility_scorer = FeasibilityScorer()

    @classmethod
    def from_packaged_data(cls, data_dir: Optional[Path] = None) -> 'CalculationEngine':
        """Load reference tables (blocking) and build an engine"""
        return cls(ReferenceDataStore.load(data_dir))

    def calculate(self, site_input: Union[RainwaterInput, RechargeInput],
                  mode: str) -> CalculationResult:
        """
        Run the pipeline for one validated site

        Args:
            site_input: RainwaterInput for 'rainwater', RechargeInput for 'recharge'
            mode: calculation type

        Returns:
            RainwaterResults or RechargeResults

        Raises:
            InputValidationError: unknown mode or input variant not matching mode
            ComputationError: a stage produced a non-finite value
        """
        if mode not in CALCULATION_MODES:
            raise InputValidationError([
                f"Invalid calculation type {mode!r}, expected one of {list(CALCULATION_MODES)}"
            ])
        if site_input.mode != mode:
            raise InputValidationError([
                f"{type(site_input).__name__} cannot be used for a {mode!r} calculation"
            ])

        city = self.resolver.resolve(site_input.location, site_input.pincode)
        self.logger.info(f"{mode.capitalize()} calculation for '{site_input.name}' using {city.city} rainfall")

        if mode == MODE_RAINWATER:
            result = self._calculate_rainwater(site_input, city)
        else:
            result = self._calculate_recharge(site_input, city)

        self._log_result(result)
        return result

    def validate_and_calculate(self, site_input: Union[RainwaterInput, RechargeInput],
                               mode: str) -> CalculationResult:
        """Validate the input (raising InputValidationError) then calculate"""
        validate_site_input(site_input, mode)
        return self.calculate(site_input, mode)

    def _calculate_rainwater(self, site: RainwaterInput, city) -> RainwaterResults:
        potential = self.potential_estimator.estimate_rainwater(site, city)
        ensure_finite({'monthly_potential': potential.monthly}, 'potential')

        demand = self.demand_estimator.estimate(site)
        coverage = min(100, round_half_up(potential.annual / max(demand, 1) * 100))
        first_flush = self.tank_sizer.first_flush(site.roof_area)

        tank = self.tank_sizer.size(potential, demand)
        ensure_finite({'capacity': tank.capacity, 'diameter': tank.dimensions.diameter}, 'tank sizing')

        cost = self.cost_model.harvesting(site, potential.annual, demand, tank.capacity)
        ensure_finite({'payback': cost.payback_period, 'life_cycle_cost': cost.life_cycle_cost}, 'cost')

        feasibility = self.feasibility_scorer.score_rainwater(site, city, potential.annual, demand)

        return RainwaterResults(
            city=city.city,
            rainwater_potential=potential.annual,
            monthly_potential=potential.monthly,
            system_cost=cost.system_cost,
            payback_period=cost.payback_period,
            life_cycle_cost=cost.life_cycle_cost,
            maintenance_cost=cost.maintenance_cost,
            feasibility_score=feasibility.score,
            feasibility_level=feasibility.level,
            recommendations=feasibility.recommendations,
            warnings=feasibility.warnings,
            household_demand=demand,
            coverage_percentage=coverage,
            first_flush=first_flush,
            tank_capacity=tank.capacity,
            tank_dimensions=tank.dimensions,
            annual_savings=cost.annual_savings,
        )

    def _calculate_recharge(self, site: RechargeInput, city) -> RechargeResults:
        potential = self.potential_estimator.estimate_recharge(site, city)
        ensure_finite({'monthly_potential': potential.monthly}, 'potential')

        sizing = self.recharge_sizer.size(potential, site)
        ensure_finite({
            'recharge_volume': sizing.recharge_volume,
            'pit_depth': sizing.pit_dimensions.depth,
        }, 'recharge sizing')

        cost = self.cost_model.recharge(site)
        ensure_finite({'payback': cost.payback_period, 'life_cycle_cost': cost.life_cycle_cost}, 'cost')

        feasibility = self.feasibility_scorer.score_recharge(site, city, sizing)

        return RechargeResults(
            city=city.city,
            rainwater_potential=potential.annual,
            monthly_potential=potential.monthly,
            system_cost=cost.system_cost,
            payback_period=cost.payback_period,
            life_cycle_cost=cost.life_cycle_cost,
            maintenance_cost=cost.maintenance_cost,
            feasibility_score=feasibility.score,
            feasibility_level=feasibility.level,
            recommendations=feasibility.recommendations,
            warnings=feasibility.warnings,
            recharge_volume=sizing.recharge_volume,
            pit_dimensions=sizing.pit_dimensions,
            trench_dimensions=sizing.trench_dimensions,
            borewell_recharge=sizing.borewell_recharge,
            borewell_rejuvenation=sizing.borewell_rejuvenation,
            groundwater_benefit=sizing.recharge_volume,
        )

    def _log_result(self, result: CalculationResult) -> None:
        """Log calculation result summary"""
        logger.info(f"   Potential: {result.rainwater_potential:,} L/year")
        if isinstance(result, RainwaterResults):
            logger.info(f"   Demand: {result.household_demand:,} L/year ({result.coverage_percentage}% covered)")
            logger.info(f"   Tank: {result.tank_capacity:,} L")
        elif isinstance(result, RechargeResults):
            logger.info(f"   Recharge: {result.recharge_volume:,} m3/year")
        logger.info(f"   Cost (medium): Rs {result.system_cost.medium:,}, payback {result.payback_period} years")
        logger.info(f"   Feasibility: {result.feasibility_score} ({result.feasibility_level})")
