"""
RECHARGE STRUCTURE SIZING
Recharge pit, infiltration trenches and borewell recharge for artificial
groundwater recharge sites

Pit and trench areas follow from the soil infiltration rate: the daily inflow
over 120 effective rainy days must soak away within an 8 hour window.
"""

import logging
import math
from typing import Optional

from varsha_core.config.settings import (
    RECHARGE_SOIL_FACTORS, RECHARGE_PARAMS, BOREWELL_RECHARGE_PARAMS,
    BOREWELL_CONDITION_FACTORS, BOREWELL_REJUVENATION
)
from varsha_core.data_sources import CoefficientTable
from varsha_core.models.results import (
    MonthlyPotential, PitDimensions, TrenchDimensions, BorewellRecharge,
    BorewellRejuvenation, RechargeSizing
)
from varsha_core.models.site import BorewellInfo, RechargeInput
from varsha_core.utils.core import round_half_up, clamp

logger = logging.getLogger(__name__)


class RechargeStructureSizer:
    """
    Sizes recharge structures from the captured volume
    - recharge pit with depth tied to groundwater level
    - infiltration trenches when open space is available
    - recharge and rejuvenation of existing borewells
    """

    def __init__(self, coefficients: CoefficientTable):
        self.logger = logging.getLogger(__name__)
        self.coefficients = coefficients
        self.params = RECHARGE_PARAMS

    def recharge_volume(self, annual_potential: int, soil_type: str) -> int:
        """Cubic meters per year reaching the aquifer"""
        return round_half_up(annual_potential / 1000 * RECHARGE_SOIL_FACTORS[soil_type])

    def infiltration_area(self, annual_potential: int, soil_type: str) -> float:
        """Minimum soak-away area (m2) for the daily inflow, no floor applied"""
        rate_m_per_hr = self.coefficients.infiltration_rates[soil_type] / 1000
        daily_inflow_liters = annual_potential / self.params['effective_rainy_days']
        # liters -> m3 is the trailing x 1000
        return daily_inflow_liters / (rate_m_per_hr * self.params['infiltration_hours_per_day'] * 1000)

    def size_pit(self, annual_potential: int, site: RechargeInput) -> PitDimensions:
        p = self.params
        footprint = max(p['pit_min_area_m2'], self.infiltration_area(annual_potential, site.soil_type))
        depth = clamp(site.groundwater_depth * p['pit_depth_fraction_of_gw'],
                      p['pit_depth_min_m'], p['pit_depth_max_m'])
        side = max(p['pit_min_side_m'], math.ceil(math.sqrt(footprint)))

        return PitDimensions(length=side, width=side, depth=round(depth, 2))

    def size_trenches(self, annual_potential: int, site: RechargeInput) -> Optional[TrenchDimensions]:
        """Trenches along the open space; None when no open space is declared"""
        if not site.has_open_space or not site.open_space_area:
            return None

        p = self.params
        width = p['trench_width_m']
        depth = min(p['trench_depth_max_m'], site.groundwater_depth * p['trench_depth_fraction_of_gw'])

        total_length = self.infiltration_area(annual_potential, site.soil_type) / width
        max_per_trench = math.sqrt(site.open_space_area) * p['trench_length_fraction_of_side']
        count = max(1, math.ceil(total_length / max_per_trench))

        return TrenchDimensions(
            width=width,
            depth=round(depth, 2),
            length=round(total_length / count, 1),
            count=count,
            total_length=round(total_length, 1),
        )

    @staticmethod
    def borewell_recharge(borewell: BorewellInfo) -> BorewellRecharge:
        """Recharge capacity through existing borewell(s), liters per hour"""
        p = BOREWELL_RECHARGE_PARAMS
        depth_factor = min(p['max_depth_factor'], borewell.depth / p['reference_depth_m'])
        condition_factor = BOREWELL_CONDITION_FACTORS[borewell.condition]

        capacity = round_half_up(p['base_rate_lph'] * depth_factor * condition_factor)
        return BorewellRecharge(
            capacity_lph=capacity,
            total_capacity_lph=capacity * borewell.count,
            depth_factor=round(depth_factor, 3),
            condition_factor=condition_factor,
        )

    @staticmethod
    def rejuvenation(condition: str) -> BorewellRejuvenation:
        advice = BOREWELL_REJUVENATION[condition]
        return BorewellRejuvenation(
            recommended=advice['recommended'],
            condition=condition,
            method=advice['method'],
            expected_improvement=advice['expected_improvement'],
        )

    def size(self, potential: MonthlyPotential, site: RechargeInput) -> RechargeSizing:
        annual = potential.annual

        volume = self.recharge_volume(annual, site.soil_type)
        pit = self.size_pit(annual, site)
        trenches = self.size_trenches(annual, site)

        borewell_recharge = None
        rejuvenation = None
        if site.has_borewell:
            borewell_recharge = self.borewell_recharge(site.borewell)
            rejuvenation = self.rejuvenation(site.borewell.condition)

        self.logger.debug(
            f"Recharge sizing: {volume}m3/yr, pit {pit.length}x{pit.width}x{pit.depth}m, "
            f"trenches {trenches.count if trenches else 0}, "
            f"borewell {borewell_recharge.total_capacity_lph if borewell_recharge else 0}L/hr"
        )

        return RechargeSizing(
            recharge_volume=volume,
            pit_dimensions=pit,
            trench_dimensions=trenches,
            borewell_recharge=borewell_recharge,
            borewell_rejuvenation=rejuvenation,
        )
