"""
COST MODEL
Three-tier capital cost, savings, maintenance, lifecycle cost and payback
for harvesting and recharge systems
"""

import logging
from typing import Dict

from varsha_core.config.settings import (
    HARVESTING_COST_PARAMS, SYSTEM_EFFICIENCY_PARAMS, ROOF_EFFICIENCY_FACTORS,
    WATER_QUALITY_PREMIUM, RECHARGE_COST_PARAMS
)
from varsha_core.data_sources import CoefficientTable
from varsha_core.models.results import SystemCost, CostEstimate
from varsha_core.models.site import RainwaterInput, RechargeInput
from varsha_core.utils.core import round_half_up

logger = logging.getLogger(__name__)


class CostModel:
    """
    Capital cost tiers are the base cost scaled by the budget multipliers.
    Maintenance is a fixed fraction of the medium tier per year and the
    lifecycle cost adds that maintenance over the system life.
    """

    def __init__(self, coefficients: CoefficientTable):
        self.logger = logging.getLogger(__name__)
        self.coefficients = coefficients

    def _tiers(self, base_cost: float) -> SystemCost:
        multipliers = self.coefficients.budget_multipliers
        return SystemCost(
            low=round_half_up(base_cost * multipliers['Low']),
            medium=round_half_up(base_cost * multipliers['Medium']),
            high=round_half_up(base_cost * multipliers['High']),
        )

    def _maintenance(self, system_cost: SystemCost) -> Dict[str, float]:
        annual = system_cost.medium * self.coefficients.maintenance_costs['annual']
        life = self.coefficients.lifecycle_factors['system_life']
        return {
            'annual': annual,
            'life_cycle_cost': system_cost.medium + annual * life,
        }

    # ------------------------------------------------------------------
    # Harvesting

    @staticmethod
    def filtration_cost(site: RainwaterInput) -> int:
        p = HARVESTING_COST_PARAMS
        cost = p['filtration_domestic'] if site.purpose == 'Domestic' else p['filtration_base']

        if site.environment == 'Industrial':
            cost *= p['filtration_industrial_multiplier']
        if site.bird_nesting:
            cost *= p['filtration_bird_nesting_multiplier']

        return round_half_up(cost)

    @staticmethod
    def system_efficiency(site: RainwaterInput, tank_capacity: int) -> float:
        """Fraction of harvested potential that is actually usable (capped at 0.95)"""
        p = SYSTEM_EFFICIENCY_PARAMS
        efficiency = p['base']

        if tank_capacity < p['small_tank_threshold_liters']:
            efficiency *= p['small_tank_factor']
        elif tank_capacity > p['large_tank_threshold_liters']:
            efficiency *= p['large_tank_factor']

        efficiency *= ROOF_EFFICIENCY_FACTORS[site.roof_type]

        if site.environment == 'Industrial':
            efficiency *= p['industrial_factor']
        if site.bird_nesting:
            efficiency *= p['bird_nesting_factor']

        return min(efficiency, p['cap'])

    def harvesting(self, site: RainwaterInput, potential: int, demand: int,
                   tank_capacity: int) -> CostEstimate:
        p = HARVESTING_COST_PARAMS

        structure = site.roof_area * self.coefficients.base_cost_per_sqm
        tank_rate = p['tank_rate_bulk'] if tank_capacity > p['tank_bulk_threshold_liters'] else p['tank_rate_standard']
        tank = tank_capacity * tank_rate
        pump = p['pump_cost_large'] if tank_capacity > p['pump_large_threshold_liters'] else p['pump_cost_small']
        filtration = self.filtration_cost(site)

        system_cost = self._tiers(structure + tank + pump + filtration)

        efficiency = self.system_efficiency(site, tank_capacity)
        usable_water = min(potential * efficiency, demand)
        premium = WATER_QUALITY_PREMIUM.get(site.purpose, WATER_QUALITY_PREMIUM['default'])
        annual_savings = round_half_up(usable_water * (self.coefficients.municipal_rate + premium))

        maintenance = self._maintenance(system_cost)
        payback = round_half_up(system_cost.medium / max(annual_savings - maintenance['annual'], 1))

        self.logger.debug(
            f"Harvesting cost: base {structure:.0f} + tank {tank:.0f} + pump {pump} + filtration {filtration}, "
            f"efficiency {efficiency:.3f}, savings {annual_savings}/yr"
        )

        return CostEstimate(
            system_cost=system_cost,
            annual_savings=annual_savings,
            payback_period=min(payback, p['payback_cap_years']),
            life_cycle_cost=round_half_up(maintenance['life_cycle_cost']),
            maintenance_cost=round_half_up(maintenance['annual']),
            system_efficiency=round(efficiency, 4),
        )

    # ------------------------------------------------------------------
    # Recharge

    def recharge(self, site: RechargeInput) -> CostEstimate:
        """
        No direct savings for recharge: payback is proxied against the yearly
        value of sustained groundwater access (higher with a borewell)
        """
        p = RECHARGE_COST_PARAMS

        base = site.catchment_area * p['catchment_cost_per_sqm'] + p['pit_cost']
        if site.has_open_space and site.open_space_area:
            base += site.open_space_area * p['trench_cost_per_sqm']
        if site.has_borewell:
            base += p['borewell_setup_cost']

        system_cost = self._tiers(base)

        if site.has_borewell:
            groundwater_value = p['groundwater_value_with_borewell']
        else:
            groundwater_value = p['groundwater_value_without_borewell']

        maintenance = self._maintenance(system_cost)
        payback = round_half_up(system_cost.medium / max(groundwater_value, 1))

        self.logger.debug(f"Recharge cost: base {base:.0f}, groundwater value {groundwater_value}/yr")

        return CostEstimate(
            system_cost=system_cost,
            annual_savings=0,
            payback_period=min(payback, p['payback_cap_years']),
            life_cycle_cost=round_half_up(maintenance['life_cycle_cost']),
            maintenance_cost=round_half_up(maintenance['annual']),
            groundwater_value=groundwater_value,
        )
